"""
Sale repository (persistence).

This module provides *only* read operations for the Sale domain entity. It does
not enforce scheduling rules (overlap, cooldown); it only fetches the sales a
validation needs, with their product and game joined in.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.catalog import Game, Product, ProductType
from domain.conflicts import CandidateQuery
from domain.dates import to_local_date
from domain.sale import Sale, SaleStatus
from repositories.client import get_supabase

# Supabase table name for sales.
# Keep this aligned with your database schema.
_SALES_TABLE: str = "sales"

# Nested select: sale -> product -> game
_SALE_COLUMNS: str = (
    "id, product_id, platform_id, start_date, end_date, sale_type, status, "
    "discount_percentage, sale_name, goal_type, notes, "
    "product:products(id, game_id, name, product_type, "
    "game:games(id, client_id, name))"
)


def _row_to_product(row: Mapping[str, Any]) -> Product:
    """Convert a joined products row (with its nested game) into a Product."""

    game_row = row.get("game")
    if not game_row:
        raise ValueError(f"Product {row.get('id')} is missing its game")

    game = Game(
        game_id=UUID(str(game_row["id"])),
        client_id=UUID(str(game_row["client_id"])),
        name=str(game_row["name"]),
    )
    return Product(
        product_id=UUID(str(row["id"])),
        game_id=UUID(str(row["game_id"])),
        name=str(row["name"]),
        product_type=ProductType(str(row["product_type"])),
        game=game,
    )


def _row_to_sale(row: Mapping[str, Any]) -> Sale:
    """Convert a Supabase row into a Sale."""

    product_row = row.get("product")
    discount = row.get("discount_percentage")

    return Sale(
        sale_id=UUID(str(row["id"])),
        product_id=UUID(str(row["product_id"])),
        platform_id=UUID(str(row["platform_id"])),
        start_date=to_local_date(row["start_date"]),
        end_date=to_local_date(row["end_date"]),
        sale_type=row.get("sale_type"),
        status=SaleStatus(str(row.get("status") or SaleStatus.PLANNED.value)),
        discount_percentage=int(discount) if discount is not None else None,
        sale_name=row.get("sale_name"),
        goal_type=row.get("goal_type"),
        notes=row.get("notes"),
        product=_row_to_product(product_row) if product_row else None,
    )


def list_sales_in_scope(query: CandidateQuery) -> List[Sale]:
    """
    Retrieve the sales a proposed sale must be checked against.

    Args:
        query: Product + platform scope, optional sale to exclude, and the
            statuses to leave out (normally rejected/cancelled)

    Returns:
        List[Sale] ordered by start_date (possibly empty)
    """

    request = (
        get_supabase().table(_SALES_TABLE)
        .select(_SALE_COLUMNS)
        .eq("product_id", str(query.product_id))
        .eq("platform_id", str(query.platform_id))
    )

    if query.exclude_sale_id is not None:
        request = request.neq("id", str(query.exclude_sale_id))

    if query.excluded_statuses:
        # Sorted for a stable query string
        request = request.not_.in_(
            "status", sorted(status.value for status in query.excluded_statuses)
        )

    response = request.order("start_date").execute()
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to list sales: {error}")

    rows = getattr(response, "data", None) or []
    return [_row_to_sale(row) for row in rows]


def list_sales_for_product(product_id: UUID) -> List[Sale]:
    """
    Retrieve every sale of a product across all platforms.

    Used by the multi-platform check; terminal sales are filtered by the caller.
    """

    response = (
        get_supabase().table(_SALES_TABLE)
        .select(_SALE_COLUMNS)
        .eq("product_id", str(product_id))
        .order("start_date")
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to list sales: {error}")

    rows = getattr(response, "data", None) or []
    return [_row_to_sale(row) for row in rows]


def get_sale_by_id(sale_id: UUID) -> Optional[Sale]:
    """
    Retrieve a single sale by its ID.

    Args:
        sale_id: Sale identifier

    Returns:
        Sale or None if not found
    """

    response = (
        get_supabase().table(_SALES_TABLE)
        .select(_SALE_COLUMNS)
        .eq("id", str(sale_id))
        .limit(1)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to get sale: {error}")

    rows = getattr(response, "data", None) or []

    if not rows:
        return None

    return _row_to_sale(rows[0])


__all__ = [
    "list_sales_in_scope",
    "list_sales_for_product",
    "get_sale_by_id",
]
