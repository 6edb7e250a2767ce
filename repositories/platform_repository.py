"""
Platform repository for loading cooldown policies.

Reads platform rows from the platforms table and converts them to
PlatformPolicy domain objects. No business rules live here.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.platform import PlatformPolicy
from repositories.client import get_supabase

_PLATFORMS_TABLE: str = "platforms"

_POLICY_COLUMNS: str = (
    "id, name, cooldown_days, special_sales_no_cooldown, approval_required, max_sale_days"
)


def _row_to_policy(row: Mapping[str, Any]) -> PlatformPolicy:
    """Convert a Supabase row into a PlatformPolicy."""

    max_sale_days = row.get("max_sale_days")
    return PlatformPolicy(
        platform_id=UUID(str(row["id"])),
        name=str(row["name"]),
        cooldown_days=int(row.get("cooldown_days") or 0),
        special_sales_no_cooldown=bool(row.get("special_sales_no_cooldown") or False),
        approval_required=bool(row.get("approval_required") or False),
        max_sale_days=int(max_sale_days) if max_sale_days is not None else None,
    )


def get_platform_policy(platform_id: UUID) -> Optional[PlatformPolicy]:
    """
    Retrieve the cooldown policy for a platform.

    Args:
        platform_id: Platform identifier

    Returns:
        PlatformPolicy or None if the platform does not exist
    """

    response = (
        get_supabase().table(_PLATFORMS_TABLE)
        .select(_POLICY_COLUMNS)
        .eq("id", str(platform_id))
        .limit(1)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to get platform: {error}")

    rows = getattr(response, "data", None) or []

    if not rows:
        return None

    return _row_to_policy(rows[0])


def get_platform_policies(platform_ids: List[UUID]) -> dict[UUID, PlatformPolicy]:
    """
    Retrieve policies for several platforms in one query.

    Unknown ids are simply absent from the returned mapping.
    """

    if not platform_ids:
        return {}

    response = (
        get_supabase().table(_PLATFORMS_TABLE)
        .select(_POLICY_COLUMNS)
        .in_("id", [str(platform_id) for platform_id in platform_ids])
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to list platforms: {error}")

    rows = getattr(response, "data", None) or []
    policies = [_row_to_policy(row) for row in rows]
    return {policy.platform_id: policy for policy in policies}


__all__ = ["get_platform_policy", "get_platform_policies"]
