"""Mini README: Abstract interface of the external JSON store.

Structure:
    * StoreBackend - the operations the ledger needs from persistence.

Payloads are the store's JSON dictionaries; typed records are built by
the ledger. Write operations return the record echoed back by the store,
which the ledger treats as the source of truth. Any failure, including a
missing echo, is raised as ``PersistenceFailure``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class StoreBackend(ABC):
    """Persistence operations consumed by the ledger."""

    @abstractmethod
    def list_products(self) -> List[Dict[str, Any]]:
        """Return every product record, or an empty list when none exist."""

    @abstractmethod
    def list_expenses(self) -> List[Dict[str, Any]]:
        """Return every expense record, or an empty list when none exist."""

    @abstractmethod
    def list_orders(self) -> List[Dict[str, Any]]:
        """Return every order record, or an empty list when none exist."""

    @abstractmethod
    def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Persist an order and return the stored record."""

    @abstractmethod
    def create_expense(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Persist an expense and return the stored record."""

    @abstractmethod
    def update_product(self, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Persist updated stock counters for a product."""

    @abstractmethod
    def update_expense(self, expense_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Replace an expense record and return the stored version."""

    @abstractmethod
    def delete_expense(self, expense_id: str) -> None:
        """Remove an expense record."""

    def close(self) -> None:
        """Release any held connections."""
