"""
Sale validation service.

Handles:
- Input checks that reject a validation outright (malformed dates, inverted
  ranges, unknown platforms, unknown sales)
- Loading the platform policy and the candidate sales from Supabase
- Running the pure conflict detector and summarizing the verdict

Concurrency:
This service only reads. Two requests can both validate overlapping sales as
valid before either is written; callers that write must serialize writes per
(product_id, platform_id) and re-validate after taking that lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from uuid import UUID

from domain.conflicts import CandidateQuery, validate_across_platforms, validate_sale
from domain.dates import DateLike, to_local_date
from domain.errors import InvalidRange, PlatformNotFound, SaleNotFound
from domain.sale import TERMINAL_STATUSES, SalePatch, SaleProposal, SaleTypeLabel
from repositories.platform_repository import get_platform_policies, get_platform_policy
from repositories.sale_repository import (
    get_sale_by_id,
    list_sales_for_product,
    list_sales_in_scope,
)
from services.verdict_formatter import ValidationSummary, summarize_verdict

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationRequest:
    """
    Request to validate a proposed sale.

    Dates may be ISO strings (any time suffix is ignored) or date values.
    """
    product_id: UUID
    platform_id: UUID
    start_date: DateLike
    end_date: DateLike
    sale_type: Optional[SaleTypeLabel] = None
    exclude_sale_id: Optional[UUID] = None


def build_proposal(request: ValidationRequest) -> SaleProposal:
    """
    Normalize request dates into a SaleProposal.

    Raises:
        MalformedDate: if either date cannot be read
        InvalidRange: if end_date is before start_date
    """
    start = to_local_date(request.start_date)
    end = to_local_date(request.end_date)

    if end < start:
        raise InvalidRange(start, end)

    return SaleProposal(
        product_id=request.product_id,
        platform_id=request.platform_id,
        start_date=start,
        end_date=end,
        sale_type=request.sale_type,
        exclude_sale_id=request.exclude_sale_id,
    )


def _log_summary(proposal: SaleProposal, summary: ValidationSummary) -> None:
    if summary.warning:
        logger.info(
            summary.warning,
            extra={
                "product_id": str(proposal.product_id),
                "platform_id": str(proposal.platform_id),
                "sale_days": summary.sale_days,
            },
        )

    if summary.valid:
        logger.info(
            "Sale validation passed",
            extra={
                "product_id": str(proposal.product_id),
                "platform_id": str(proposal.platform_id),
                "start_date": proposal.start_date.isoformat(),
                "end_date": proposal.end_date.isoformat(),
            },
        )
        return

    logger.warning(
        f"Sale validation found {summary.total_conflicts} conflict(s) on {summary.platform}",
        extra={
            "product_id": str(proposal.product_id),
            "platform_id": str(proposal.platform_id),
            "start_date": proposal.start_date.isoformat(),
            "end_date": proposal.end_date.isoformat(),
            "direct_conflict_ids": [str(s.sale_id) for s in summary.direct_conflicts],
            "cooldown_conflict_ids": [str(s.sale_id) for s in summary.cooldown_conflicts],
        },
    )


def _validate_proposal(proposal: SaleProposal) -> ValidationSummary:
    policy = get_platform_policy(proposal.platform_id)
    if policy is None:
        raise PlatformNotFound(proposal.platform_id)

    candidates = list_sales_in_scope(
        CandidateQuery(
            product_id=proposal.product_id,
            platform_id=proposal.platform_id,
            exclude_sale_id=proposal.exclude_sale_id,
            excluded_statuses=TERMINAL_STATUSES,
        )
    )

    verdict = validate_sale(proposal, candidates, policy)
    summary = summarize_verdict(verdict, policy, proposal)
    _log_summary(proposal, summary)
    return summary


def validate_proposed_sale(request: ValidationRequest) -> ValidationSummary:
    """
    Validate a proposed sale against the existing sales on its platform.

    Args:
        request: Proposed sale

    Returns:
        ValidationSummary (valid or not)

    Raises:
        MalformedDate: unreadable start/end date
        InvalidRange: end_date before start_date
        PlatformNotFound: no policy for request.platform_id

    Example:
        summary = validate_proposed_sale(ValidationRequest(
            product_id=product_id,
            platform_id=steam_id,
            start_date="2026-03-10",
            end_date="2026-03-17",
        ))
        print(summary.valid, summary.cooldown_end)
    """
    proposal = build_proposal(request)
    return _validate_proposal(proposal)


def validate_on_platforms(
    request: ValidationRequest,
    platform_ids: List[UUID],
) -> Dict[UUID, ValidationSummary]:
    """
    Validate the same proposed sale on several platforms (duplicate-to-platforms).

    request.platform_id is ignored in favour of platform_ids.

    Raises:
        PlatformNotFound: for the first requested platform without a policy
    """
    proposal = build_proposal(request)

    policies = get_platform_policies(platform_ids)
    for platform_id in platform_ids:
        if platform_id not in policies:
            raise PlatformNotFound(platform_id)

    existing = [
        sale for sale in list_sales_for_product(proposal.product_id)
        if not sale.status.is_terminal
    ]

    verdicts = validate_across_platforms(proposal, policies, existing)

    summaries: Dict[UUID, ValidationSummary] = {}
    for platform_id in platform_ids:
        per_platform = SaleProposal(
            product_id=proposal.product_id,
            platform_id=platform_id,
            start_date=proposal.start_date,
            end_date=proposal.end_date,
            sale_type=proposal.sale_type,
        )
        summary = summarize_verdict(verdicts[platform_id], policies[platform_id], per_platform)
        _log_summary(per_platform, summary)
        summaries[platform_id] = summary

    return summaries


def revalidate_sale_edit(sale_id: UUID, patch: SalePatch) -> ValidationSummary:
    """
    Validate an edit to an existing sale before it is saved.

    The sale is compared against its neighbours with itself excluded.

    Raises:
        SaleNotFound: unknown sale_id
        InvalidRange: the patched dates end before they start
        PlatformNotFound: the sale's platform no longer exists
    """
    sale = get_sale_by_id(sale_id)
    if sale is None:
        raise SaleNotFound(sale_id)

    edited = patch.apply_to(sale)

    if not patch.touches_schedule:
        logger.info(
            "Sale edit does not change dates or type; re-validating current schedule",
            extra={"sale_id": str(sale_id), "fields": sorted(patch.changes())},
        )

    return _validate_proposal(SaleProposal.from_sale(edited))


__all__ = [
    "ValidationRequest",
    "build_proposal",
    "validate_proposed_sale",
    "validate_on_platforms",
    "revalidate_sale_edit",
]
