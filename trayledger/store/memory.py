"""Mini README: In-memory stand-in for the REST store.

``InMemoryStoreBackend`` keeps JSON records in dictionaries and echoes
copies back exactly like the HTTP store would. It powers the offline demo
mode of the CLI and the test-suite. ``seed_demo=True`` loads a small
deterministic catalog priced in KES.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional

from ..errors import PersistenceFailure
from ..logging_utils import get_logger
from .base import StoreBackend

LOGGER = get_logger(__name__)

DEMO_PRODUCTS: List[Dict[str, Any]] = [
    {"id": "prod_001", "name": "Maasai Shuka Blanket", "price": 1800.0, "capacity": 20, "available": 14, "sold": 6},
    {"id": "prod_002", "name": "Kiondo Sisal Basket", "price": 2500.0, "capacity": 12, "available": 4, "sold": 8},
    {"id": "prod_003", "name": "Soapstone Carving", "price": 950.0, "capacity": 30, "available": 30, "sold": 0},
    {"id": "prod_004", "name": "Kikoy Beach Wrap", "price": 1200.0, "capacity": 15, "available": 0, "sold": 15},
]


class InMemoryStoreBackend(StoreBackend):
    """Dictionary-backed store returning deep copies of its records."""

    def __init__(
        self,
        products: Optional[Iterable[Dict[str, Any]]] = None,
        orders: Optional[Iterable[Dict[str, Any]]] = None,
        expenses: Optional[Iterable[Dict[str, Any]]] = None,
        *,
        seed_demo: bool = False,
    ) -> None:
        if products is None and seed_demo:
            products = DEMO_PRODUCTS
        self._products: Dict[str, Dict[str, Any]] = {
            str(record["id"]): copy.deepcopy(record) for record in products or []
        }
        self._orders: List[Dict[str, Any]] = [copy.deepcopy(record) for record in orders or []]
        self._expenses: Dict[str, Dict[str, Any]] = {
            str(record["id"]): copy.deepcopy(record) for record in expenses or []
        }
        LOGGER.debug(
            "In-memory store initialised with %s products, %s orders, %s expenses",
            len(self._products),
            len(self._orders),
            len(self._expenses),
        )

    def list_products(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(list(self._products.values()))

    def list_expenses(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(list(self._expenses.values()))

    def list_orders(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._orders)

    def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._orders.append(copy.deepcopy(payload))
        return copy.deepcopy(payload)

    def create_expense(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._expenses[str(payload["id"])] = copy.deepcopy(payload)
        return copy.deepcopy(payload)

    def update_product(self, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if product_id not in self._products:
            raise PersistenceFailure(f"Product {product_id} not found in store.")
        self._products[product_id].update(copy.deepcopy(payload))
        return copy.deepcopy(self._products[product_id])

    def update_expense(self, expense_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if expense_id not in self._expenses:
            raise PersistenceFailure(f"Expense {expense_id} not found in store.")
        self._expenses[expense_id] = copy.deepcopy(payload)
        return copy.deepcopy(payload)

    def delete_expense(self, expense_id: str) -> None:
        if self._expenses.pop(expense_id, None) is None:
            raise PersistenceFailure(f"Expense {expense_id} not found in store.")
