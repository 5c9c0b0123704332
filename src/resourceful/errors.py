"""Exceptions raised while binding, reloading and fetching resources"""

__all__ = [
    "Error",
    "CoercionError",
    "UnsupportedCoercion",
    "TransportError",
    "NotFound",
]


class Error(Exception):
    """base class for all errors raised by resourceful"""


class CoercionError(Error, ValueError):
    """A raw value could not be coerced to the declared type.

    Only raised for dates. The numeric kinds fall back to zero instead.

    Parameters
    ----------
    value
        the offending raw value
    kind: str
        the name of the coercion kind
    """

    def __init__(self, value, kind="date"):
        super().__init__(
            "cannot coerce {!r} to a {}".format(value, kind)
        )
        self.value, self.kind = value, kind


class UnsupportedCoercion(Error, LookupError):
    """a property was declared with something that is not a coercion"""


class TransportError(Error):
    """The transport could not deliver a usable payload.

    Parameters
    ----------
    message: str
        a description of the failure
    request: ~resourceful.http.Request or None
        the request which was sent
    response: ~resourceful.http.Response or None
        the response received, if any
    """

    def __init__(self, message, request=None, response=None):
        super().__init__(message)
        self.request, self.response = request, response

    @property
    def status_code(self):
        """the HTTP status code of the response, if there was one"""
        return None if self.response is None else self.response.status_code


class NotFound(TransportError):
    """the requested resource does not exist"""
