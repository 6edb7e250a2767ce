"""
Domain: Sales (scheduled promotions).

A Sale is a discount event for one product on one platform, running on
inclusive calendar dates start_date..end_date.

Rules captured here:
- start_date <= end_date (InvalidRange otherwise).
- sale_type is an open classification: the known labels are listed in
  SaleType, but any custom label is accepted.
- Sales in a terminal status (rejected, cancelled) never take part in
  conflict checks; callers exclude them from the candidate set.

Sales are owned by the persistence layer. This module only holds read-only
snapshots and a typed patch for edits.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date
from enum import Enum
from typing import Optional, Union
from uuid import UUID

from .catalog import Product
from .errors import InvalidRange


class SaleType(str, Enum):
    CUSTOM = "custom"
    REGULAR = "regular"
    SEASONAL = "seasonal"
    FESTIVAL = "festival"
    SPECIAL = "special"


SaleTypeLabel = Union[SaleType, str]


def sale_type_label(sale_type: Optional[SaleTypeLabel]) -> Optional[str]:
    """Return the lowercase label of a sale type (enum member or free text)."""

    if sale_type is None:
        return None
    if isinstance(sale_type, SaleType):
        return sale_type.value
    return sale_type.strip().lower() or None


class SaleStatus(str, Enum):
    DRAFT = "draft"
    PLANNED = "planned"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    LIVE = "live"
    ENDED = "ended"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Rejected/cancelled sales never block other sales."""

        return self in (SaleStatus.REJECTED, SaleStatus.CANCELLED)


TERMINAL_STATUSES = frozenset(status for status in SaleStatus if status.is_terminal)


@dataclass(frozen=True, slots=True)
class Sale:
    """Immutable snapshot of an existing sale."""

    sale_id: UUID
    product_id: UUID
    platform_id: UUID
    start_date: date
    end_date: date
    sale_type: Optional[SaleTypeLabel] = None
    status: SaleStatus = SaleStatus.PLANNED
    discount_percentage: Optional[int] = None
    sale_name: Optional[str] = None
    goal_type: Optional[str] = None
    notes: Optional[str] = None
    product: Optional[Product] = None

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise InvalidRange(self.start_date, self.end_date)
        if self.product is not None and self.product.product_id != self.product_id:
            raise ValueError("Sale.product does not match Sale.product_id")


@dataclass(frozen=True, slots=True)
class SaleProposal:
    """
    A sale being considered for placement (new, duplicated or edited).

    exclude_sale_id names the sale being edited so it is not compared with itself.
    """

    product_id: UUID
    platform_id: UUID
    start_date: date
    end_date: date
    sale_type: Optional[SaleTypeLabel] = None
    exclude_sale_id: Optional[UUID] = None

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise InvalidRange(self.start_date, self.end_date)

    @classmethod
    def from_sale(cls, sale: Sale) -> "SaleProposal":
        """Proposal for re-validating an existing sale against its neighbours."""

        return cls(
            product_id=sale.product_id,
            platform_id=sale.platform_id,
            start_date=sale.start_date,
            end_date=sale.end_date,
            sale_type=sale.sale_type,
            exclude_sale_id=sale.sale_id,
        )


@dataclass(frozen=True, slots=True)
class SalePatch:
    """
    Typed partial update for a Sale.

    Every mutable field is declared; None means "leave unchanged". Identity
    (sale_id), product and platform are not patchable.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sale_type: Optional[SaleTypeLabel] = None
    status: Optional[SaleStatus] = None
    discount_percentage: Optional[int] = None
    sale_name: Optional[str] = None
    goal_type: Optional[str] = None
    notes: Optional[str] = None

    def changes(self) -> dict[str, object]:
        """Fields this patch sets, by name."""

        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) is not None
        }

    @property
    def touches_schedule(self) -> bool:
        """True if the patch can change the outcome of conflict checks."""

        return any(
            value is not None
            for value in (self.start_date, self.end_date, self.sale_type)
        )

    def apply_to(self, sale: Sale) -> Sale:
        """
        Return a new Sale with this patch applied.

        Raises:
            InvalidRange: if the patched dates end before they start.
        """

        return replace(sale, **self.changes())


__all__ = [
    "SaleType",
    "SaleTypeLabel",
    "sale_type_label",
    "SaleStatus",
    "TERMINAL_STATUSES",
    "Sale",
    "SaleProposal",
    "SalePatch",
]
