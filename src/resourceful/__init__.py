"""
The entire public API is available at root level::

    from resourceful import Resource, Property, Array, Client, reload, ...
"""
import logging

from . import clients, coercions, http
from .__about__ import __description__, __version__  # noqa
from .array import *  # noqa
from .clients import *  # noqa
from .coercions import *  # noqa
from .config import *  # noqa
from .errors import *  # noqa
from .refresher import *  # noqa
from .resource import *  # noqa
from .schema import *  # noqa

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["clients", "coercions", "http"]
