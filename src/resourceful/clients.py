"""The transport: sending requests and loading raw payloads"""
import logging
import urllib.request
from functools import singledispatch
from urllib.error import HTTPError

import requests

from .config import DEFAULT_CONFIGURATION
from .errors import NotFound, TransportError
from .http import Request, Response

__all__ = ["send", "Client"]

logger = logging.getLogger(__name__)


@singledispatch
def send(http, request):
    """Send a :class:`~resourceful.http.Request` with an HTTP client.
    Dispatches on the type of ``http``.

    Supported out of the box are :class:`requests.Session` and
    :class:`urllib.request.OpenerDirector`.
    Other clients are added with ``send.register``, as long as they
    return a :class:`~resourceful.http.Response` for any status.

    Raises
    ------
    TypeError
        if ``http`` is of an unregistered type
    """
    raise TypeError("no way to send requests with {!r}".format(http))


@send.register(urllib.request.OpenerDirector)
def _send_with_opener(opener, request):
    raw = urllib.request.Request(request.query_url(),
                                 headers=dict(request.headers),
                                 method=request.method)
    try:
        res = opener.open(raw)
    except HTTPError as error:
        # error statuses are responses too, judged by the caller
        res = error
    return Response(res.getcode(), res.read(), dict(res.headers.items()))


@send.register(requests.Session)
def _send_with_session(session, request):
    res = session.request(request.method, request.url,
                          params=dict(request.params),
                          headers=dict(request.headers))
    return Response(res.status_code, res.content, dict(res.headers))


class Client(object):
    """The transport capability shared by the resources it loads.

    Parameters
    ----------
    access_token: str or None
        sent as bearer token, if given
    http
        any client registered with :func:`send`.
        A new :class:`requests.Session` by default.
    config: ~resourceful.config.Configuration
        the settings to start from
    **options
        settings to override, see :class:`~resourceful.config.Configuration`

    Example
    -------

    >>> client = Client('<ACCESS_TOKEN>', default_locale='nl-NL')
    >>> client.request('spaces/yr5m0jky5hsh/locales')
    {'sys': {'type': 'Array'}, 'total': 2, ...}
    """

    def __init__(self, access_token=None, http=None,
                 config=DEFAULT_CONFIGURATION, **options):
        self.config = config.replace(**options) if options else config
        self.http = requests.Session() if http is None else http
        headers = dict(self.config.default_headers,
                       **{"User-Agent": self.config.user_agent})
        if access_token is not None:
            headers["Authorization"] = "Bearer " + access_token
        self._headers = headers

    @property
    def default_locale(self):
        return self.config.default_locale

    def request(self, endpoint, params=None):
        """Fetch the raw payload of an endpoint.

        Parameters
        ----------
        endpoint: str
            the path, relative to the configured API url
        params: ~typing.Mapping or None
            query parameters

        Returns
        -------
        dict or list
            the decoded JSON payload

        Raises
        ------
        ~resourceful.errors.NotFound
            if the server responds with 404
        ~resourceful.errors.TransportError
            for any other error status, or an undecodable body
        """
        request = Request(self.config.api_url + endpoint,
                          params=dict(params or {}),
                          headers=dict(self._headers))
        logger.debug("sending %r", request)
        response = send(self.http, request)
        logger.debug("received %r", response)
        return self._load(request, response)

    def _load(self, request, response):
        if response.status_code == 404:
            raise NotFound("not found: " + request.url, request, response)
        if not response.ok:
            raise TransportError(
                "request failed with status {}: {}".format(
                    response.status_code, request.url),
                request, response)
        try:
            return response.json()
        except (TypeError, ValueError) as exc:
            raise TransportError(
                "response is not valid JSON: " + request.url,
                request, response) from exc

    def __repr__(self):
        return "<Client: {0.config.api_url}>".format(self)
