"""
Domain: Calendar date normalization (pure).

Sale dates are plain local calendar days. Parsing "2026-01-16" as a UTC instant
and then reading it back in a timezone behind UTC shows up as 2026-01-15 on the
timeline, so dates are never routed through an instant:

- Strings: year/month/day are read directly from the leading 10 characters
  (YYYY-MM-DD). A time suffix introduced by "T" or a space ("T10:00:00Z",
  "T01:00:00+02:00") is discarded, not converted. Anything else after the
  date is malformed.
- datetime values: their own wall-clock calendar day is kept.
- date values: returned as-is.

Normalizing an already-normalized value returns an equal value.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Union

from .errors import MalformedDate

DateLike = Union[str, date, datetime]

_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?=$|[T ])")


def to_local_date(value: DateLike) -> date:
    """
    Normalize a date representation into a local calendar date.

    Raises:
        MalformedDate: if the value is not a date/datetime and not a string
            holding a valid YYYY-MM-DD calendar date, optionally followed by
            a "T" or space time suffix.

    Example:
        to_local_date("2026-01-16T23:30:00-08:00")
        # Returns date(2026, 1, 16)
    """

    # datetime is a subclass of date, so it must be checked first.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise MalformedDate(value)

    match = _ISO_DATE_PREFIX.match(value.strip())
    if match is None:
        raise MalformedDate(value)

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedDate(value) from exc


def format_date(value: DateLike) -> str:
    """Format as YYYY-MM-DD (storage and transport format)."""

    return to_local_date(value).isoformat()


def format_display_date(value: DateLike) -> str:
    """Format as DD/MM/YYYY (display format used on the timeline)."""

    return to_local_date(value).strftime("%d/%m/%Y")


__all__ = [
    "DateLike",
    "to_local_date",
    "format_date",
    "format_display_date",
]
