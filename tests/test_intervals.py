"""
Tests for `domain/intervals.py`.

Covers contract rules:
- Overlap is symmetric and boundary-inclusive (touching endpoints overlap).
- days_between is an inclusive count (equal dates => 1).
- shift_days crosses month/year/leap boundaries in whole days.
- DateRange rejects end < start with InvalidRange.
"""

from __future__ import annotations

from datetime import date, timedelta
from itertools import product

import pytest

from domain.errors import InvalidRange
from domain.intervals import (
    DateRange,
    days_between,
    periods_overlap,
    shift_days,
)

D = date.fromisoformat


@pytest.mark.parametrize(
    "s1, e1, s2, e2, expected",
    [
        ("2026-03-10", "2026-03-15", "2026-03-15", "2026-03-20", True),   # touching
        ("2026-03-10", "2026-03-15", "2026-03-16", "2026-03-20", False),  # adjacent
        ("2026-03-10", "2026-03-20", "2026-03-12", "2026-03-14", True),   # containment
        ("2026-03-10", "2026-03-10", "2026-03-10", "2026-03-10", True),   # same single day
        ("2026-03-10", "2026-03-15", "2026-03-01", "2026-03-09", False),  # entirely before
        ("2026-03-10", "2026-03-15", "2026-03-01", "2026-03-10", True),   # touching start
    ],
)
def test_periods_overlap_cases(s1: str, e1: str, s2: str, e2: str, expected: bool) -> None:
    """Verify overlap for touching, adjacent, nested and disjoint ranges."""

    assert periods_overlap(D(s1), D(e1), D(s2), D(e2)) is expected


def test_periods_overlap_is_symmetric() -> None:
    """Verify overlaps(a,b,c,d) == overlaps(c,d,a,b) over a dense grid of ranges."""

    base = date(2026, 1, 1)
    ranges = [
        (base + timedelta(days=start), base + timedelta(days=start + length))
        for start in range(0, 8)
        for length in range(0, 4)
    ]

    for (s1, e1), (s2, e2) in product(ranges, repeat=2):
        assert periods_overlap(s1, e1, s2, e2) == periods_overlap(s2, e2, s1, e1)


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("2026-01-10", "2026-01-10", 1),
        ("2026-01-10", "2026-01-16", 7),
        ("2026-02-27", "2026-03-01", 3),
        ("2024-02-27", "2024-03-01", 4),
        ("2025-12-30", "2026-01-02", 4),
        ("2026-01-10", "2026-01-09", 0),
    ],
)
def test_days_between_is_inclusive(start: str, end: str, expected: int) -> None:
    """Verify inclusive counting, including across month, leap and year ends."""

    assert days_between(D(start), D(end)) == expected


@pytest.mark.parametrize(
    "value, days, expected",
    [
        ("2026-01-10", 6, "2026-01-16"),
        ("2026-01-31", 1, "2026-02-01"),
        ("2024-02-28", 1, "2024-02-29"),
        ("2025-12-31", 1, "2026-01-01"),
        ("2026-03-01", -1, "2026-02-28"),
        ("2026-01-01", -1, "2025-12-31"),
        ("2026-05-01", 0, "2026-05-01"),
        ("2026-05-01", 14, "2026-05-15"),
    ],
)
def test_shift_days(value: str, days: int, expected: str) -> None:
    """Verify sign-aware calendar shifting across month and year boundaries."""

    assert shift_days(D(value), days) == D(expected)


def test_date_range_rejects_inverted_range() -> None:
    """Verify DateRange enforces start <= end."""

    with pytest.raises(InvalidRange):
        DateRange(start=D("2026-03-15"), end=D("2026-03-10"))


def test_date_range_days() -> None:
    """Verify DateRange.days is the inclusive length."""

    assert DateRange(start=D("2026-03-10"), end=D("2026-03-15")).days == 6
    assert DateRange(start=D("2026-03-10"), end=D("2026-03-10")).days == 1
