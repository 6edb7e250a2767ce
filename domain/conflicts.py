"""
Domain: Sale conflict detection (pure).

Decides whether a proposed sale can be placed next to the existing sales for
the same product on the same platform.

Rules:
- Direct conflict: the proposed range shares at least one day with an existing
  sale (touching endpoints count).
- Cooldown conflict (forward): the proposed sale starts after an existing sale
  ends but before that sale's cooldown boundary.
- Cooldown conflict (reverse): an existing sale starts after the proposed sale
  ends but before the proposed sale's cooldown boundary. This makes the result
  independent of the order in which sales were entered.
- A sale is reported at most once; direct conflicts take precedence.
- Exempt sale types (see domain.cooldown) skip both cooldown checks but not
  the direct check.

No I/O, no clock, no shared state: the same inputs always give the same verdict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple
from uuid import UUID

from .cooldown import cooldown_end, effective_cooldown_days, starts_within_cooldown
from .intervals import periods_overlap
from .platform import PlatformPolicy
from .sale import Sale, SaleProposal, SaleStatus


@dataclass(frozen=True, slots=True)
class CandidateQuery:
    """
    Which existing sales a proposed sale is compared against.

    excluded_statuses is empty for the pure detector (callers pre-filter);
    the repository passes terminal statuses down to the database.
    """

    product_id: UUID
    platform_id: UUID
    exclude_sale_id: Optional[UUID] = None
    excluded_statuses: FrozenSet[SaleStatus] = field(default_factory=frozenset)

    def matches(self, sale: Sale) -> bool:
        return (
            sale.product_id == self.product_id
            and sale.platform_id == self.platform_id
            and (self.exclude_sale_id is None or sale.sale_id != self.exclude_sale_id)
            and sale.status not in self.excluded_statuses
        )


def select_candidates(sales: Iterable[Sale], query: CandidateQuery) -> List[Sale]:
    """Stateless filter: existing sales matching the query, input order kept."""

    return [sale for sale in sales if query.matches(sale)]


@dataclass(frozen=True, slots=True)
class ConflictVerdict:
    """
    Result of validating one proposed sale. Computed per call, never stored.

    cooldown_end is the full-length display date (proposed end + cooldown_days),
    not the boundary used for classification.
    """

    valid: bool
    direct_conflicts: Tuple[Sale, ...]
    cooldown_conflicts: Tuple[Sale, ...]
    cooldown_end: date

    @property
    def conflicts(self) -> Tuple[Sale, ...]:
        """All conflicting sales: direct first, then cooldown."""

        return self.direct_conflicts + self.cooldown_conflicts


def validate_sale(
    proposal: SaleProposal,
    existing_sales: Iterable[Sale],
    policy: PlatformPolicy,
    exclude_sale_id: Optional[UUID] = None,
) -> ConflictVerdict:
    """
    Classify a proposed sale against existing sales.

    Args:
        proposal: The sale to place (start_date <= end_date guaranteed by SaleProposal)
        existing_sales: Existing sales; anything outside the proposal's
            product+platform scope is ignored
        policy: Cooldown policy of the proposal's platform
        exclude_sale_id: Sale to ignore (the one being edited). Defaults to
            proposal.exclude_sale_id.

    Returns:
        ConflictVerdict

    Example:
        verdict = validate_sale(proposal, sales, policy)
        if not verdict.valid:
            print(f"{len(verdict.conflicts)} conflicting sale(s)")
    """

    if exclude_sale_id is None:
        exclude_sale_id = proposal.exclude_sale_id

    candidates = select_candidates(
        existing_sales,
        CandidateQuery(
            product_id=proposal.product_id,
            platform_id=proposal.platform_id,
            exclude_sale_id=exclude_sale_id,
        ),
    )

    cooldown_days = effective_cooldown_days(policy, proposal.sale_type)

    direct: List[Sale] = []
    cooldown: List[Sale] = []

    for candidate in candidates:
        if periods_overlap(
            proposal.start_date, proposal.end_date,
            candidate.start_date, candidate.end_date,
        ):
            direct.append(candidate)
            continue

        if cooldown_days == 0:
            continue

        # Proposed sale starts inside the candidate's cooldown.
        if starts_within_cooldown(proposal.start_date, candidate.end_date, cooldown_days):
            cooldown.append(candidate)
            continue

        # Candidate starts inside the proposed sale's cooldown.
        if starts_within_cooldown(candidate.start_date, proposal.end_date, cooldown_days):
            cooldown.append(candidate)

    return ConflictVerdict(
        valid=not direct and not cooldown,
        direct_conflicts=tuple(direct),
        cooldown_conflicts=tuple(cooldown),
        cooldown_end=cooldown_end(proposal.end_date, policy.cooldown_days),
    )


def validate_across_platforms(
    proposal: SaleProposal,
    policies: Mapping[UUID, PlatformPolicy],
    existing_sales: Iterable[Sale],
) -> Dict[UUID, ConflictVerdict]:
    """
    Validate the same dates and sale type on several platforms at once.

    The proposal's own platform_id is ignored; each policy's platform is used
    instead. Used when duplicating a sale to other storefronts.
    """

    sales = list(existing_sales)
    results: Dict[UUID, ConflictVerdict] = {}

    for platform_id, policy in policies.items():
        per_platform = SaleProposal(
            product_id=proposal.product_id,
            platform_id=platform_id,
            start_date=proposal.start_date,
            end_date=proposal.end_date,
            sale_type=proposal.sale_type,
            exclude_sale_id=proposal.exclude_sale_id,
        )
        results[platform_id] = validate_sale(per_platform, sales, policy)

    return results


__all__ = [
    "CandidateQuery",
    "select_candidates",
    "ConflictVerdict",
    "validate_sale",
    "validate_across_platforms",
]
