"""
Pytest configuration and shared fixtures.

This file adds the project root to the Python path so that tests can import
from the domain, repositories, services, api and scripts modules, and provides
small factories for building sales and platform policies.
"""

import sys
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional
from uuid import UUID, uuid4

import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.conflicts import CandidateQuery  # noqa: E402
from domain.platform import PlatformPolicy  # noqa: E402
from domain.sale import Sale, SaleProposal, SaleStatus  # noqa: E402

PRODUCT_ID = UUID("00000000-0000-0000-0000-000000000001")
OTHER_PRODUCT_ID = UUID("00000000-0000-0000-0000-000000000002")
PLATFORM_ID = UUID("00000000-0000-0000-0000-0000000000a1")
OTHER_PLATFORM_ID = UUID("00000000-0000-0000-0000-0000000000a2")


@pytest.fixture
def make_sale() -> Callable[..., Sale]:
    """Factory for existing sales on PRODUCT_ID / PLATFORM_ID."""

    def _make(
        start: str,
        end: str,
        *,
        sale_id: Optional[UUID] = None,
        product_id: UUID = PRODUCT_ID,
        platform_id: UUID = PLATFORM_ID,
        sale_type: Optional[str] = "regular",
        status: SaleStatus = SaleStatus.PLANNED,
        sale_name: Optional[str] = None,
    ) -> Sale:
        return Sale(
            sale_id=sale_id or uuid4(),
            product_id=product_id,
            platform_id=platform_id,
            start_date=date.fromisoformat(start),
            end_date=date.fromisoformat(end),
            sale_type=sale_type,
            status=status,
            sale_name=sale_name,
        )

    return _make


@pytest.fixture
def make_proposal() -> Callable[..., SaleProposal]:
    """Factory for proposed sales on PRODUCT_ID / PLATFORM_ID."""

    def _make(
        start: str,
        end: str,
        *,
        sale_type: Optional[str] = "regular",
        product_id: UUID = PRODUCT_ID,
        platform_id: UUID = PLATFORM_ID,
        exclude_sale_id: Optional[UUID] = None,
    ) -> SaleProposal:
        return SaleProposal(
            product_id=product_id,
            platform_id=platform_id,
            start_date=date.fromisoformat(start),
            end_date=date.fromisoformat(end),
            sale_type=sale_type,
            exclude_sale_id=exclude_sale_id,
        )

    return _make


@pytest.fixture
def make_policy() -> Callable[..., PlatformPolicy]:
    """Factory for PLATFORM_ID's cooldown policy."""

    def _make(
        cooldown_days: int = 30,
        *,
        special_sales_no_cooldown: bool = False,
        platform_id: UUID = PLATFORM_ID,
        name: str = "Steam",
        max_sale_days: Optional[int] = None,
    ) -> PlatformPolicy:
        return PlatformPolicy(
            platform_id=platform_id,
            name=name,
            cooldown_days=cooldown_days,
            special_sales_no_cooldown=special_sales_no_cooldown,
            max_sale_days=max_sale_days,
        )

    return _make


@pytest.fixture
def fake_store(monkeypatch, make_policy):
    """In-memory platforms + sales wired into the validation service's repository calls."""

    from services import sale_validation_service

    class Store:
        policies = {PLATFORM_ID: make_policy(7, name="Steam")}
        sales: List[Sale] = []
        queries: List[CandidateQuery] = []

    def get_platform_policy(platform_id: UUID) -> Optional[PlatformPolicy]:
        return Store.policies.get(platform_id)

    def get_platform_policies(platform_ids: List[UUID]):
        return {pid: Store.policies[pid] for pid in platform_ids if pid in Store.policies}

    def list_sales_in_scope(query: CandidateQuery) -> List[Sale]:
        Store.queries.append(query)
        return [sale for sale in Store.sales if query.matches(sale)]

    def list_sales_for_product(product_id: UUID) -> List[Sale]:
        return [sale for sale in Store.sales if sale.product_id == product_id]

    def get_sale_by_id(sale_id: UUID) -> Optional[Sale]:
        return next((sale for sale in Store.sales if sale.sale_id == sale_id), None)

    monkeypatch.setattr(sale_validation_service, "get_platform_policy", get_platform_policy)
    monkeypatch.setattr(sale_validation_service, "get_platform_policies", get_platform_policies)
    monkeypatch.setattr(sale_validation_service, "list_sales_in_scope", list_sales_in_scope)
    monkeypatch.setattr(sale_validation_service, "list_sales_for_product", list_sales_for_product)
    monkeypatch.setattr(sale_validation_service, "get_sale_by_id", get_sale_by_id)

    Store.sales = []
    Store.queries = []
    return Store
