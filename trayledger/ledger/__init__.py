"""Mini README: Tray, orders and expenses for the storefront.

This package holds the stateful heart of the storefront: the ``Tray`` of
items awaiting purchase, the ``LedgerStore`` that owns the catalog, order
and expense collections, and the ``Ledger`` that finalizes purchases and
records expenses against the external store.
"""

from .journal import PendingWrite, WriteJournal, WriteKind
from .ledger import (
    AUTO_EXPENSE_CATEGORY,
    AUTO_EXPENSE_NAME,
    STOCK_COST_RATIO,
    ExpenseReceipt,
    Ledger,
    LedgerState,
    PurchaseReceipt,
    stock_cost_for,
)
from .models import Expense, ExpenseType, Order, OrderStatus, TrayItem
from .state import LedgerStore
from .tray import Tray

__all__ = [
    "AUTO_EXPENSE_CATEGORY",
    "AUTO_EXPENSE_NAME",
    "STOCK_COST_RATIO",
    "Expense",
    "ExpenseReceipt",
    "ExpenseType",
    "Ledger",
    "LedgerState",
    "LedgerStore",
    "Order",
    "OrderStatus",
    "PendingWrite",
    "PurchaseReceipt",
    "Tray",
    "TrayItem",
    "WriteJournal",
    "WriteKind",
    "stock_cost_for",
]
