"""
Domain: Cooldown policy resolution (pure).

Two different "end of cooldown" dates exist and must not be conflated:

- cooldown_boundary(end, n) = end + (n - 1) days
  The sale's end day counts as day zero of the cooldown, so the boundary is
  the last forbidden-looking day that is nevertheless allowed as a new start
  ("last cooldown day may be the first sale day"). Used for conflict checks:
  a start strictly between the sale's end and the boundary is a conflict.

- cooldown_end(end, n) = end + n days
  The full, unadjusted value shown to users as "next available date".

Exemption:
- seasonal/special sales skip cooldown entirely on platforms with
  special_sales_no_cooldown set. Direct overlap still applies to them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .intervals import shift_days
from .platform import PlatformPolicy
from .sale import SaleType, SaleTypeLabel, sale_type_label

EXEMPT_SALE_TYPES = frozenset({SaleType.SEASONAL.value, SaleType.SPECIAL.value})


def is_exempt_sale_type(sale_type: Optional[SaleTypeLabel]) -> bool:
    return sale_type_label(sale_type) in EXEMPT_SALE_TYPES


def effective_cooldown_days(policy: PlatformPolicy, sale_type: Optional[SaleTypeLabel]) -> int:
    """
    Cooldown length that applies to a sale of the given type on this platform.

    Returns 0 for exempt sale types on platforms that waive cooldown for them,
    otherwise the platform's cooldown_days.
    """

    if policy.special_sales_no_cooldown and is_exempt_sale_type(sale_type):
        return 0
    return policy.cooldown_days


def cooldown_boundary(sale_end: date, cooldown_days: int) -> date:
    """Last day of the cooldown window; a new sale may start on it."""

    return shift_days(sale_end, cooldown_days - 1)


def cooldown_end(sale_end: date, cooldown_days: int) -> date:
    """Display value for when a sale's cooldown is over (full length)."""

    return shift_days(sale_end, cooldown_days)


def starts_within_cooldown(start: date, sale_end: date, cooldown_days: int) -> bool:
    """
    True if a sale starting on `start` violates the cooldown after `sale_end`.

    Only starts strictly after the sale's end and strictly before the
    boundary are violations; the boundary day itself is allowed.
    """

    if cooldown_days <= 0:
        return False
    return sale_end < start < cooldown_boundary(sale_end, cooldown_days)


@dataclass(frozen=True, slots=True)
class CooldownPeriod:
    """Inclusive cooldown window drawn after a sale on the timeline."""

    start: date
    end: date


def cooldown_period(sale_end: date, cooldown_days: int) -> Optional[CooldownPeriod]:
    """
    Window shown after a sale: the day after it ends through end + cooldown_days.

    Returns None when there is no cooldown.
    """

    if cooldown_days <= 0:
        return None
    return CooldownPeriod(
        start=shift_days(sale_end, 1),
        end=cooldown_end(sale_end, cooldown_days),
    )


__all__ = [
    "EXEMPT_SALE_TYPES",
    "is_exempt_sale_type",
    "effective_cooldown_days",
    "cooldown_boundary",
    "cooldown_end",
    "starts_within_cooldown",
    "CooldownPeriod",
    "cooldown_period",
]
