"""Coercion of raw payload values into their typed form

Todo
----
* a coercion kind for geographic locations
"""
import abc
import copy
import enum
import math
import numbers
import re
from datetime import datetime

from dataclasses import dataclass

from .errors import CoercionError, UnsupportedCoercion
from .utils import parse_iso8601

__all__ = [
    "Kind",
    "Coercion",
    "Primitive",
    "Nested",
    "PASS",
    "COERCIONS",
    "coerce",
    "as_coercion",
]


_LEADING_INT = re.compile(r"\s*([+-]?\d+(?:_\d+)*)")
_LEADING_FLOAT = re.compile(
    r"\s*([+-]?(?:\d+(?:_\d+)*(?:\.\d+(?:_\d+)*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)


class Kind(enum.Enum):
    """the primitive coercion kinds"""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"


def to_string(value):
    return None if value is None else str(value)


def to_integer(value):
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1).replace("_", "")) if match else 0
    return 0


def to_float(value):
    if isinstance(value, numbers.Real):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        return float(match.group(1).replace("_", "")) if match else 0.0
    return 0.0


def to_boolean(value):
    return value is not None and value is not False


def to_date(value):
    if value is None or isinstance(value, datetime):
        return value
    try:
        return parse_iso8601(value)
    except (TypeError, ValueError) as exc:
        raise CoercionError(value) from exc


# Numeric kinds default to zero on bad input while dates raise.
# Legacy behavior: upstream payloads rely on it, keep it as is.
COERCIONS = {
    Kind.STRING:  to_string,
    Kind.INTEGER: to_integer,
    Kind.FLOAT:   to_float,
    Kind.BOOLEAN: to_boolean,
    Kind.DATE:    to_date,
}


class Coercion(abc.ABC):
    """Interface for coercion descriptors.
    One of :class:`Primitive`, :class:`Nested` or :data:`PASS`.
    """

    @abc.abstractmethod
    def apply(self, value, client=None):
        """coerce a single (non-list) raw value"""
        raise NotImplementedError()


@dataclass(frozen=True)
class Primitive(Coercion):
    """coerce to one of the primitive :class:`Kind`\\s"""
    kind: Kind

    def apply(self, value, client=None):
        return COERCIONS[self.kind](value)


@dataclass(frozen=True)
class Nested(Coercion):
    """construct a sub-resource of the given type"""
    type: type

    def apply(self, value, client=None):
        return self.type(value, client=client)


class _Pass(Coercion):
    """leave the value as it is"""
    __slots__ = ()

    def apply(self, value, client=None):
        # containers are copied so bound state never aliases the payload
        return copy.deepcopy(value)

    def __repr__(self):
        return "PASS"


PASS = _Pass()

_PYTHON_TYPES = {
    str:      Kind.STRING,
    int:      Kind.INTEGER,
    float:    Kind.FLOAT,
    bool:     Kind.BOOLEAN,
    datetime: Kind.DATE,
}


def coerce(coercion, value, client=None):
    """Coerce a raw value, element-wise if it is a list.

    Parameters
    ----------
    coercion: Coercion
        the descriptor to apply
    value
        the raw value
    client
        passed through unchanged to nested resources

    Raises
    ------
    ~resourceful.errors.CoercionError
        if a date cannot be parsed
    """
    if isinstance(value, list):
        return [coercion.apply(item, client) for item in value]
    return coercion.apply(value, client)


def as_coercion(shorthand):
    """Normalize a declaration shorthand into a :class:`Coercion`.

    Parameters
    ----------
    shorthand
        ``None`` (pass-through), a :class:`Kind` or its name,
        one of ``str``, ``int``, ``float``, ``bool``, ``datetime``,
        a resource class, or a :class:`Coercion`

    Raises
    ------
    ~resourceful.errors.UnsupportedCoercion
        if ``shorthand`` is none of the above
    """
    if shorthand is None:
        return PASS
    if isinstance(shorthand, Coercion):
        return shorthand
    if isinstance(shorthand, Kind):
        return Primitive(shorthand)
    if isinstance(shorthand, str):
        try:
            return Primitive(Kind(shorthand))
        except ValueError:
            raise UnsupportedCoercion(shorthand)
    if isinstance(shorthand, type):
        if shorthand in _PYTHON_TYPES:
            return Primitive(_PYTHON_TYPES[shorthand])
        from .resource import Resource
        if issubclass(shorthand, Resource):
            return Nested(shorthand)
    raise UnsupportedCoercion(shorthand)
