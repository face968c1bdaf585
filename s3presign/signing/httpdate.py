"""
HTTP date normalization for the response-expires override.

Every accepted input is rendered in IMF-fixdate form, for example
``Wed, 21 Oct 2015 07:28:00 GMT``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Union

from s3presign.core.errors import InvalidArgument

DateLike = Union[datetime, date, int, float, str]

_EPOCH_STRING = re.compile(r"-?\d+(\.\d+)?")


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def httpdate(value: DateLike) -> str:
    """
    Format a point in time as an IMF-fixdate string.

    Accepts a datetime, a date (midnight UTC), epoch seconds, or a string.
    Strings of digits (optionally signed, with a fractional part) are epoch
    seconds; other strings are read as RFC 2822, then as ISO-8601.

    Raises:
        InvalidArgument: The value cannot be interpreted as a point in time.
    """
    return format_datetime(_coerce(value), usegmt=True)


def _coerce(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise InvalidArgument.unparseable_date(value)
    if isinstance(value, (int, float)):
        return _from_epoch(value, value)
    if isinstance(value, str):
        return to_utc(_parse_string(value))
    raise InvalidArgument.unparseable_date(value)


def _from_epoch(seconds: float, value: DateLike) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidArgument.unparseable_date(value, cause=e) from e


def _parse_string(value: str) -> datetime:
    text = value.strip()
    if _EPOCH_STRING.fullmatch(text):
        return _from_epoch(float(text), value)
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidArgument.unparseable_date(value, cause=e) from e
