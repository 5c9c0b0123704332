"""Miscellaneous tools, boilerplate, and shortcuts"""
import re
from datetime import datetime, timedelta, timezone

__all__ = ["snakify", "camelize", "parse_iso8601"]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SNAKE_PART = re.compile(r"_+([a-z0-9])")

_ISO8601 = re.compile(
    r"""^\s*
    (?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})
    (?:[Tt\ ]
        (?P<hour>\d{1,2}):(?P<minute>\d{2})
        (?::(?P<second>\d{2})(?:[.,](?P<fraction>\d+))?)?
        \s*(?P<offset>[Zz]|[+-]\d{2}(?::?\d{2})?)?
    )?
    \s*$""",
    re.VERBOSE,
)


def snakify(name):
    """convert a camelCase wire name into a snake_case identifier

    >>> snakify('defaultLocale')
    'default_locale'
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def camelize(name):
    """convert a snake_case identifier into a camelCase wire name.
    The inverse of :func:`snakify` for conventional names.

    >>> camelize('default_locale')
    'defaultLocale'
    """
    head, _, tail = name.partition("_")
    if not tail:
        return name
    return head + _SNAKE_PART.sub(
        lambda m: m.group(1).upper(), "_" + tail
    )


def _parse_offset(text):
    if text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:] or 0)
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_iso8601(value):
    """Parse an ISO-8601 date or date-time.

    Accepts dates without a time, ``T`` or space separators,
    optional seconds and fractions, and ``Z``, ``+hh:mm``, ``+hhmm``
    or ``+hh`` offsets. Values without an offset are taken as UTC.

    Parameters
    ----------
    value: str
        the text to parse

    Returns
    -------
    ~datetime.datetime
        a timezone-aware datetime

    Raises
    ------
    ValueError
        if the text is not a valid date
    TypeError
        if the value is not a string
    """
    match = _ISO8601.match(value)
    if match is None:
        raise ValueError("invalid ISO-8601 date: {!r}".format(value))
    parts = match.groupdict()
    fraction = (parts["fraction"] or "")[:6].ljust(6, "0")
    return datetime(
        int(parts["year"]),
        int(parts["month"]),
        int(parts["day"]),
        int(parts["hour"] or 0),
        int(parts["minute"] or 0),
        int(parts["second"] or 0),
        int(fraction),
        tzinfo=(
            timezone.utc
            if parts["offset"] is None
            else _parse_offset(parts["offset"])
        ),
    )
