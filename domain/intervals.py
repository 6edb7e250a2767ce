"""
Domain: Interval algebra over calendar dates (pure).

All ranges are inclusive on both ends: a sale from 2026-03-10 to 2026-03-15
runs on six calendar days, including the 15th. Arithmetic is whole-day only.

Overlap rule:
- Two ranges overlap unless one ends strictly before the other starts.
- Touching endpoints (one range's end == the other's start) IS an overlap,
  because both ranges include that shared day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from .errors import InvalidRange


def periods_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Return True if [start1, end1] and [start2, end2] share at least one day."""

    return not (start1 > end2 or start2 > end1)


def days_between(start: date, end: date) -> int:
    """
    Inclusive day count from start to end.

    Equal dates count as 1 day. When end < start the result is the signed
    value (end - start) + 1, e.g. 0 for the day before.
    """

    return (end - start).days + 1


def shift_days(value: date, days: int) -> date:
    """Shift a date by a signed number of calendar days."""

    return value + timedelta(days=days)


@dataclass(frozen=True, slots=True)
class DateRange:
    """
    Inclusive calendar date range.

    Invariant: start <= end (raises InvalidRange otherwise).
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidRange(self.start, self.end)

    @property
    def days(self) -> int:
        """Number of calendar days covered, inclusive."""

        return days_between(self.start, self.end)


__all__ = [
    "DateRange",
    "periods_overlap",
    "days_between",
    "shift_days",
]
