"""
Domain: Platform cooldown policy.

Each distribution platform (storefront) sets its own quiet period: after a sale
for a product ends, the same product may not start another sale on that
platform until the cooldown has passed. Some platforms waive the cooldown for
seasonal/special event sales.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True, slots=True)
class PlatformPolicy:
    """
    Cooldown rules for one platform.

    Invariant: cooldown_days >= 0.

    approval_required and max_sale_days are carried for callers; the conflict
    checks only read cooldown_days and special_sales_no_cooldown.
    """

    platform_id: UUID
    name: str
    cooldown_days: int
    special_sales_no_cooldown: bool = False
    approval_required: bool = False
    max_sale_days: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cooldown_days < 0:
            raise ValueError("cooldown_days must be >= 0")
        if self.max_sale_days is not None and self.max_sale_days < 1:
            raise ValueError("max_sale_days must be >= 1 when set")


__all__ = ["PlatformPolicy"]
