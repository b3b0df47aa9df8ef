"""
Date helpers shared by criteria parsing and the DAOs.

Dates are stored as UTC ISO-8601 text with microsecond precision so
that plain string comparison in SQL orders them chronologically.
Naive values are taken to be UTC.
"""

import re
from datetime import date, datetime, timezone
from typing import Union


DateLike = Union[str, date, datetime]

# A "+" in an unencoded query string arrives as a space before the offset.
_SPACED_OFFSET = re.compile(r"^(.*\d)\s(\d{2}:?\d{2})$")


def parse_datetime(value: DateLike) -> datetime:
    """Parse an ISO-8601 string, ``date`` or ``datetime`` into a ``datetime``.

    Raises ``ValueError`` when the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            restored = _SPACED_OFFSET.sub(r"\1+\2", text)
            if restored == text:
                raise
            return datetime.fromisoformat(restored)
    raise ValueError(f"invalid date: {value!r}")


def to_storage(value: DateLike) -> str:
    """Normalise a date value to the text stored in the database."""
    dt = parse_datetime(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")
