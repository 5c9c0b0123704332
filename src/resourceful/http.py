"""Value objects exchanged with the HTTP clients"""
import json
import typing as t
from urllib.parse import urlencode

from dataclasses import dataclass, field

__all__ = ["Request", "Response"]


@dataclass(frozen=True)
class Request:
    """A read request against the API.

    Parameters
    ----------
    url: str
        the absolute url
    params: ~typing.Mapping[str, str]
        query parameters
    headers: ~typing.Mapping[str, str]
        request headers. Left out of the repr, they carry credentials.
    method: str
        the HTTP method
    """
    url: str
    params: t.Mapping[str, t.Any] = field(default_factory=dict)
    headers: t.Mapping[str, str] = field(default_factory=dict, repr=False)
    method: str = "GET"

    def query_url(self):
        """the url including the encoded query string"""
        if not self.params:
            return self.url
        return self.url + "?" + urlencode(self.params)


@dataclass(frozen=True)
class Response:
    """A raw response, as returned by any client registered with
    :func:`~resourceful.clients.send`.

    Parameters
    ----------
    status_code: int
        the HTTP status code
    content: bytes
        the undecoded body
    headers: ~typing.Mapping[str, str]
        response headers
    """
    status_code: int
    content: bytes = field(default=b"", repr=False)
    headers: t.Mapping[str, str] = field(default_factory=dict, repr=False)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        """the decoded body

        Raises
        ------
        ValueError
            if the body is not valid JSON
        """
        return json.loads(self.content)
