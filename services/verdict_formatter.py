"""
Verdict formatter for sale validation responses.

Shapes a ConflictVerdict into what the API layer serializes: conflict counts,
a summary message when invalid, and the platform's name and cooldown. When the
proposed sale is passed in, its length, its cooldown window and a soft warning
for sales longer than the platform's max_sale_days are added. The decision
itself (valid / conflicting sales) is passed through unchanged; the duration
warning never makes a sale invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

from domain.conflicts import ConflictVerdict
from domain.cooldown import CooldownPeriod, cooldown_period
from domain.dates import format_date
from domain.intervals import DateRange
from domain.platform import PlatformPolicy
from domain.sale import Sale, SaleProposal, sale_type_label


@dataclass(frozen=True, slots=True)
class ValidationSummary:
    """
    Transport-ready validation result for one proposed sale.

    Output shape (to_payload):
        {
          "valid": bool,
          "conflicts": {"direct": [...], "cooldown": [...]},
          "cooldownEnd": "YYYY-MM-DD",
          "platform": str,
          "cooldownDays": int,
          "directCount": int,
          "cooldownCount": int,
          "message": str | None,
          "saleDays": int | None,
          "warning": str | None
        }
    """
    valid: bool
    direct_conflicts: Tuple[Sale, ...]
    cooldown_conflicts: Tuple[Sale, ...]
    cooldown_end: date
    platform: str
    cooldown_days: int
    message: Optional[str] = None
    sale_days: Optional[int] = None
    cooldown_window: Optional[CooldownPeriod] = None
    warning: Optional[str] = None

    @property
    def direct_count(self) -> int:
        return len(self.direct_conflicts)

    @property
    def cooldown_count(self) -> int:
        return len(self.cooldown_conflicts)

    @property
    def total_conflicts(self) -> int:
        return self.direct_count + self.cooldown_count

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to plain JSON-compatible types."""
        return {
            "valid": self.valid,
            "conflicts": {
                "direct": [sale_to_payload(sale) for sale in self.direct_conflicts],
                "cooldown": [sale_to_payload(sale) for sale in self.cooldown_conflicts],
            },
            "cooldownEnd": format_date(self.cooldown_end),
            "platform": self.platform,
            "cooldownDays": self.cooldown_days,
            "directCount": self.direct_count,
            "cooldownCount": self.cooldown_count,
            "message": self.message,
            "saleDays": self.sale_days,
            "warning": self.warning,
        }


def conflict_message(total_conflicts: int) -> Optional[str]:
    """Human-readable summary; None when there is nothing to report."""
    if total_conflicts == 0:
        return None
    return f"Sale conflicts with {total_conflicts} existing sale(s) or cooldown period(s)"


def duration_warning(sale_days: int, max_sale_days: Optional[int]) -> Optional[str]:
    """Soft limit notice for sales longer than the platform recommends."""
    if max_sale_days is None or sale_days <= max_sale_days:
        return None
    return f"Exceeds platform recommendation of {max_sale_days} days"


def sale_to_payload(sale: Sale) -> Dict[str, Any]:
    """Serialize a conflicting sale the way it is stored (snake_case, ISO dates)."""
    payload: Dict[str, Any] = {
        "id": str(sale.sale_id),
        "product_id": str(sale.product_id),
        "platform_id": str(sale.platform_id),
        "start_date": format_date(sale.start_date),
        "end_date": format_date(sale.end_date),
        "sale_type": sale_type_label(sale.sale_type),
        "sale_name": sale.sale_name,
        "status": sale.status.value,
    }

    if sale.product is not None:
        payload["product"] = {
            "name": sale.product.name,
            "game": {"name": sale.product.game.name},
        }

    return payload


def summarize_verdict(
    verdict: ConflictVerdict,
    policy: PlatformPolicy,
    proposal: Optional[SaleProposal] = None,
) -> ValidationSummary:
    """
    Build the transport summary for a verdict.

    Args:
        verdict: Detector result
        policy: Policy the verdict was computed with
        proposal: The validated sale; enables sale_days, cooldown_window and
            the max_sale_days warning

    Example:
        summary = summarize_verdict(validate_sale(proposal, sales, policy), policy, proposal)
        print(summary.message or "OK")
        # "Sale conflicts with 2 existing sale(s) or cooldown period(s)"
    """
    total = len(verdict.direct_conflicts) + len(verdict.cooldown_conflicts)

    sale_days = None
    window = None
    warning = None
    if proposal is not None:
        sale_days = DateRange(proposal.start_date, proposal.end_date).days
        window = cooldown_period(proposal.end_date, policy.cooldown_days)
        warning = duration_warning(sale_days, policy.max_sale_days)

    return ValidationSummary(
        valid=verdict.valid,
        direct_conflicts=verdict.direct_conflicts,
        cooldown_conflicts=verdict.cooldown_conflicts,
        cooldown_end=verdict.cooldown_end,
        platform=policy.name,
        cooldown_days=policy.cooldown_days,
        message=conflict_message(total),
        sale_days=sale_days,
        cooldown_window=window,
        warning=warning,
    )


__all__ = [
    "ValidationSummary",
    "conflict_message",
    "duration_warning",
    "sale_to_payload",
    "summarize_verdict",
]
