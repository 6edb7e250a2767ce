"""
Tests for `repositories/sale_repository.py` and `repositories/platform_repository.py`.

The Supabase client is replaced with a recording fake, so these tests check
row parsing and the filters sent to the database without a connection.
"""

from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from typing import Any, List, Optional, Tuple
from uuid import UUID

import pytest

from conftest import PLATFORM_ID, PRODUCT_ID
from domain.catalog import ProductType
from domain.conflicts import CandidateQuery
from domain.errors import MalformedDate
from domain.sale import TERMINAL_STATUSES, SaleStatus
from repositories import platform_repository, sale_repository

SALE_ID = UUID("00000000-0000-0000-0000-000000000020")
GAME_ID = UUID("00000000-0000-0000-0000-0000000000b1")
CLIENT_ID = UUID("00000000-0000-0000-0000-0000000000c1")


class FakeQuery:
    """Chainable stand-in for a postgrest query builder that records calls."""

    def __init__(self, rows: List[dict], error: Optional[str] = None) -> None:
        self.rows = rows
        self.error = error
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._negate = False

    def _record(self, name: str, *args: Any) -> "FakeQuery":
        if self._negate:
            name = f"not.{name}"
            self._negate = False
        self.calls.append((name, args))
        return self

    @property
    def not_(self) -> "FakeQuery":
        self._negate = True
        return self

    def select(self, *args: Any) -> "FakeQuery":
        return self._record("select", *args)

    def eq(self, *args: Any) -> "FakeQuery":
        return self._record("eq", *args)

    def neq(self, *args: Any) -> "FakeQuery":
        return self._record("neq", *args)

    def in_(self, *args: Any) -> "FakeQuery":
        return self._record("in_", *args)

    def order(self, *args: Any) -> "FakeQuery":
        return self._record("order", *args)

    def limit(self, *args: Any) -> "FakeQuery":
        return self._record("limit", *args)

    def execute(self) -> SimpleNamespace:
        return SimpleNamespace(data=self.rows, error=self.error)


class FakeClient:
    def __init__(self, query: FakeQuery) -> None:
        self.query = query
        self.tables: List[str] = []

    def table(self, name: str) -> FakeQuery:
        self.tables.append(name)
        return self.query


def _sale_row(**overrides: Any) -> dict:
    row = {
        "id": str(SALE_ID),
        "product_id": str(PRODUCT_ID),
        "platform_id": str(PLATFORM_ID),
        "start_date": "2026-03-10",
        "end_date": "2026-03-17T00:00:00+00:00",
        "sale_type": "seasonal",
        "status": "confirmed",
        "discount_percentage": 40,
        "sale_name": "Spring Sale",
        "goal_type": "visibility",
        "notes": None,
        "product": {
            "id": str(PRODUCT_ID),
            "game_id": str(GAME_ID),
            "name": "Starfall",
            "product_type": "base",
            "game": {"id": str(GAME_ID), "client_id": str(CLIENT_ID), "name": "Starfall"},
        },
    }
    row.update(overrides)
    return row


@pytest.fixture
def fake_db(monkeypatch):
    def _install(rows: List[dict], error: Optional[str] = None) -> FakeClient:
        client = FakeClient(FakeQuery(rows, error))
        monkeypatch.setattr(sale_repository, "get_supabase", lambda: client)
        monkeypatch.setattr(platform_repository, "get_supabase", lambda: client)
        return client

    return _install


def test_row_to_sale_parses_nested_product_and_game() -> None:
    """Verify a joined row becomes Sale -> Product -> Game with local dates."""

    sale = sale_repository._row_to_sale(_sale_row())

    assert sale.sale_id == SALE_ID
    assert sale.start_date == date(2026, 3, 10)
    assert sale.end_date == date(2026, 3, 17)
    assert sale.status is SaleStatus.CONFIRMED
    assert sale.discount_percentage == 40
    assert sale.product is not None
    assert sale.product.product_type is ProductType.BASE
    assert sale.product.game.client_id == CLIENT_ID


def test_row_to_sale_without_product_join() -> None:
    sale = sale_repository._row_to_sale(_sale_row(product=None, status=None))

    assert sale.product is None
    assert sale.status is SaleStatus.PLANNED


def test_row_to_sale_malformed_date_propagates() -> None:
    """Verify bad stored dates are surfaced, never coerced."""

    with pytest.raises(MalformedDate):
        sale_repository._row_to_sale(_sale_row(start_date="10/03/2026"))


def test_row_to_product_requires_game() -> None:
    product_row = _sale_row()["product"]
    product_row["game"] = None

    with pytest.raises(ValueError):
        sale_repository._row_to_product(product_row)


def test_list_sales_in_scope_applies_query_filters(fake_db) -> None:
    """Verify scope, exclusion and status filters are pushed to the database."""

    client = fake_db([_sale_row()])
    query = CandidateQuery(
        product_id=PRODUCT_ID,
        platform_id=PLATFORM_ID,
        exclude_sale_id=UUID("00000000-0000-0000-0000-0000000000e1"),
        excluded_statuses=TERMINAL_STATUSES,
    )

    sales = sale_repository.list_sales_in_scope(query)

    assert [sale.sale_id for sale in sales] == [SALE_ID]
    assert client.tables == ["sales"]
    calls = client.query.calls
    assert ("eq", ("product_id", str(PRODUCT_ID))) in calls
    assert ("eq", ("platform_id", str(PLATFORM_ID))) in calls
    assert ("neq", ("id", "00000000-0000-0000-0000-0000000000e1")) in calls
    assert ("not.in_", ("status", ["cancelled", "rejected"])) in calls
    assert calls[-1] == ("order", ("start_date",))


def test_list_sales_in_scope_minimal_query(fake_db) -> None:
    client = fake_db([])

    sales = sale_repository.list_sales_in_scope(
        CandidateQuery(product_id=PRODUCT_ID, platform_id=PLATFORM_ID)
    )

    assert sales == []
    names = [name for name, _ in client.query.calls]
    assert "neq" not in names
    assert "not.in_" not in names


def test_list_sales_in_scope_raises_on_error(fake_db) -> None:
    fake_db([], error="permission denied")

    with pytest.raises(RuntimeError, match="permission denied"):
        sale_repository.list_sales_in_scope(
            CandidateQuery(product_id=PRODUCT_ID, platform_id=PLATFORM_ID)
        )


def test_get_sale_by_id_not_found(fake_db) -> None:
    fake_db([])

    assert sale_repository.get_sale_by_id(SALE_ID) is None


def test_get_platform_policy(fake_db) -> None:
    """Verify a platform row becomes a PlatformPolicy."""

    fake_db([{
        "id": str(PLATFORM_ID),
        "name": "Steam",
        "cooldown_days": 28,
        "special_sales_no_cooldown": True,
        "approval_required": True,
        "max_sale_days": 14,
    }])

    policy = platform_repository.get_platform_policy(PLATFORM_ID)

    assert policy is not None
    assert policy.name == "Steam"
    assert policy.cooldown_days == 28
    assert policy.special_sales_no_cooldown is True
    assert policy.max_sale_days == 14


def test_get_platform_policy_missing(fake_db) -> None:
    fake_db([])

    assert platform_repository.get_platform_policy(PLATFORM_ID) is None


def test_get_platform_policies_keyed_by_id(fake_db) -> None:
    client = fake_db([{"id": str(PLATFORM_ID), "name": "Steam", "cooldown_days": None}])

    policies = platform_repository.get_platform_policies([PLATFORM_ID])

    assert list(policies) == [PLATFORM_ID]
    assert policies[PLATFORM_ID].cooldown_days == 0
    assert ("in_", ("id", [str(PLATFORM_ID)])) in client.query.calls
    assert platform_repository.get_platform_policies([]) == {}
