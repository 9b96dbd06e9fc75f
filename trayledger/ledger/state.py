"""Mini README: Explicit in-memory store shared by tray, ledger and views.

``LedgerStore`` owns the catalog and the order and expense collections. It
is created once by the application and handed to each component, so no
collection lives at module level. Orders are append-only; expenses can be
replaced or removed by stable id.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..catalog import Catalog
from ..errors import NotFound
from .models import Expense, Order


class LedgerStore:
    """Owner of the catalog, orders and expenses for one session."""

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        orders: Optional[Iterable[Order]] = None,
        expenses: Optional[Iterable[Expense]] = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else Catalog()
        self._orders: List[Order] = list(orders or [])
        self._expenses: List[Expense] = list(expenses or [])

    def list_orders(self) -> List[Order]:
        return list(self._orders)

    def list_expenses(self) -> List[Expense]:
        return list(self._expenses)

    def replace_orders(self, orders: Iterable[Order]) -> None:
        self._orders = list(orders)

    def replace_expenses(self, expenses: Iterable[Expense]) -> None:
        self._expenses = list(expenses)

    def append_order(self, order: Order) -> None:
        self._orders.append(order)

    def append_expense(self, expense: Expense) -> None:
        self._expenses.append(expense)

    def find_expense(self, expense_id: str) -> Expense:
        for expense in self._expenses:
            if expense.expense_id == expense_id:
                return expense
        raise NotFound(f"Expense {expense_id} not found.", details={"expense_id": expense_id})

    def replace_expense(self, updated: Expense) -> None:
        """Swap the expense sharing ``updated``'s id, keeping its position."""

        for position, expense in enumerate(self._expenses):
            if expense.expense_id == updated.expense_id:
                self._expenses[position] = updated
                return
        raise NotFound(
            f"Expense {updated.expense_id} not found.", details={"expense_id": updated.expense_id}
        )

    def remove_expense(self, expense_id: str) -> Expense:
        expense = self.find_expense(expense_id)
        self._expenses.remove(expense)
        return expense
