"""Configuration of clients and resources"""
import dataclasses
import typing as t
from dataclasses import dataclass, field

__all__ = ["Configuration", "DEFAULT_CONFIGURATION"]


@dataclass(frozen=True)
class Configuration:
    """Settings shared by a :class:`~resourceful.Client`
    and the resources it loads.

    Parameters
    ----------
    api_url: str
        the prefix of every endpoint
    default_locale: str
        the locale in which flattened fields are stored
    user_agent: str
        sent with every request
    default_headers: ~typing.Mapping[str, str]
        added to every request
    """
    api_url:         str = "https://api.contentful.com/"
    default_locale:  str = "en-US"
    user_agent:      str = "resourceful"
    default_headers: t.Mapping[str, str] = field(default_factory=dict)

    def replace(self, **changes):
        """a copy with the given settings replaced"""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIGURATION = Configuration()
