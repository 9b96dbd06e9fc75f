"""Mini README: Shared fixtures for the storefront ledger tests.

Structure:
    * PRODUCT_RECORDS / TODAY - deterministic store contents and clock.
    * FlakyStoreBackend - in-memory store whose operations can be told to fail.
    * CountingRateSource - static rates that record how often they were read.
    * backend / rate_source / ledger - fixtures wiring a loaded ledger.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Set

import pytest

from trayledger.currency import CurrencyConverter, StaticRateSource
from trayledger.errors import PersistenceFailure
from trayledger.ledger import Ledger, LedgerStore
from trayledger.store import InMemoryStoreBackend

TODAY = date(2024, 6, 1)

PRODUCT_RECORDS: List[Dict[str, Any]] = [
    {"id": "p1", "name": "Shuka Blanket", "price": 100.0, "capacity": 10, "available": 5, "sold": 5},
    {"id": "p2", "name": "Sisal Basket", "price": 200.0, "capacity": 4, "available": 2, "sold": 2},
    {"id": "p3", "name": "Kikoy Wrap", "price": 50.0, "capacity": 3, "available": 0, "sold": 3},
]


class FlakyStoreBackend(InMemoryStoreBackend):
    """In-memory store that raises ``PersistenceFailure`` for listed operations."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.failing: Set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise PersistenceFailure(f"{operation} rejected by test store")

    def list_products(self):
        self._check("list_products")
        return super().list_products()

    def list_orders(self):
        self._check("list_orders")
        return super().list_orders()

    def list_expenses(self):
        self._check("list_expenses")
        return super().list_expenses()

    def create_order(self, payload):
        self._check("create_order")
        return super().create_order(payload)

    def create_expense(self, payload):
        self._check("create_expense")
        return super().create_expense(payload)

    def update_product(self, product_id, payload):
        self._check("update_product")
        return super().update_product(product_id, payload)

    def update_expense(self, expense_id, payload):
        self._check("update_expense")
        return super().update_expense(expense_id, payload)

    def delete_expense(self, expense_id):
        self._check("delete_expense")
        return super().delete_expense(expense_id)


class CountingRateSource(StaticRateSource):
    def __init__(self, rates: Dict[str, float]) -> None:
        super().__init__(rates)
        self.calls = 0

    def fetch_rates(self) -> Dict[str, float]:
        self.calls += 1
        return super().fetch_rates()


@pytest.fixture
def backend() -> FlakyStoreBackend:
    return FlakyStoreBackend(products=PRODUCT_RECORDS)


@pytest.fixture
def rate_source() -> CountingRateSource:
    return CountingRateSource({"USD": 1.0, "KES": 130.0, "EUR": 0.5})


@pytest.fixture
def ledger(backend: FlakyStoreBackend, rate_source: CountingRateSource) -> Ledger:
    loaded = Ledger(
        LedgerStore(),
        backend,
        CurrencyConverter(rate_source, base_currency="KES"),
        today=lambda: TODAY,
    )
    loaded.load()
    return loaded
