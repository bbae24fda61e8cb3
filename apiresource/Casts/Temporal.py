"""
Date/time normalization shared by the date, datetime and timestamp casts.

Every function here is pure: the parsing path depends only on the type and
shape of the input, never on the attribute it belongs to. Naive values are
taken to be UTC.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Pattern

DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

STANDARD_DATE: Pattern[str] = re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})$')
NUMERIC: Pattern[str] = re.compile(r'^-?\d+(\.\d+)?$')


def as_datetime(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> datetime:
    """
    Normalize a date/time input to an aware datetime.

    Accepted inputs, checked in order:
    - datetime / date instances
    - Unix timestamps (int, float or numeric string)
    - ``Y-m-d`` dates with or without zero padding (midnight)
    - strings in ``date_format``
    - ISO-8601 strings

    @raise ValueError: when no recognized form matches
    """
    if isinstance(value, datetime):
        return _ensure_timezone(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, bool):
        raise ValueError(f"Boolean {value!r} is not a date/time value")

    if isinstance(value, (int, float)):
        return _from_timestamp(value)

    if not isinstance(value, str):
        raise ValueError(f"Unsupported date/time type {type(value).__name__}")

    text = value.strip()

    if NUMERIC.match(text):
        return _from_timestamp(float(text) if '.' in text else int(text))

    match = STANDARD_DATE.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return datetime(year, month, day, tzinfo=timezone.utc)

    try:
        return _ensure_timezone(datetime.strptime(text, date_format))
    except ValueError:
        pass

    try:
        return _ensure_timezone(datetime.fromisoformat(text.replace('Z', '+00:00')))
    except ValueError:
        raise ValueError(f"Unrecognized date/time value {value!r}") from None


def as_date(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> datetime:
    """Normalize a date/time input to midnight of its day."""
    return as_datetime(value, date_format).replace(hour=0, minute=0, second=0, microsecond=0)


def as_timestamp(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> int:
    """Normalize a date/time input to Unix epoch seconds."""
    return int(as_datetime(value, date_format).timestamp())


def from_datetime(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Normalize a date/time input to its stored text form, in UTC."""
    return to_utc(as_datetime(value, date_format)).strftime(date_format)


def to_utc(value: datetime) -> datetime:
    """Convert a datetime to UTC, taking naive values to be UTC already."""
    return _ensure_timezone(value).astimezone(timezone.utc)


def _ensure_timezone(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _from_timestamp(value: float) -> datetime:
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"Timestamp {value!r} is out of range") from e
