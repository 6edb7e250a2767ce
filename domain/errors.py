"""
Domain: Validation error taxonomy.

Every error here represents a *rejected validation*: the input could not be
judged at all. They are raised before or around the pure conflict checks and
must be surfaced to the caller, never swallowed.

- MalformedDate: a date value could not be read as a calendar date.
- InvalidRange: a sale ends before it starts.
- PlatformNotFound: no cooldown policy exists for the requested platform.
- SaleNotFound: the sale being edited does not exist.
"""

from __future__ import annotations


class SaleSchedulingError(Exception):
    """Base class for all sale scheduling validation errors."""


class MalformedDate(SaleSchedulingError, ValueError):
    """Raised when a date value is not a readable YYYY-MM-DD calendar date."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Malformed date: {value!r} (expected YYYY-MM-DD)")


class InvalidRange(SaleSchedulingError, ValueError):
    """Raised when a date range ends before it starts."""

    def __init__(self, start: object, end: object) -> None:
        self.start = start
        self.end = end
        super().__init__(f"End date {end} is before start date {start}")


class PlatformNotFound(SaleSchedulingError, LookupError):
    """Raised when a platform's cooldown policy cannot be found."""

    def __init__(self, platform_id: object) -> None:
        self.platform_id = platform_id
        super().__init__(f"Platform not found: {platform_id}")


class SaleNotFound(SaleSchedulingError, LookupError):
    """Raised when the sale being edited does not exist."""

    def __init__(self, sale_id: object) -> None:
        self.sale_id = sale_id
        super().__init__(f"Sale not found: {sale_id}")


__all__ = [
    "SaleSchedulingError",
    "MalformedDate",
    "InvalidRange",
    "PlatformNotFound",
    "SaleNotFound",
]
