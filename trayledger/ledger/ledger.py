"""Mini README: Purchase finalization and expense bookkeeping.

Structure:
    * LedgerState - Idle -> Validating -> Committing -> Idle | Failed.
    * PurchaseReceipt / ExpenseReceipt - results handed back to callers.
    * stock_cost_for - automatic cost-of-goods policy for a sale.
    * Ledger - loads the store, finalizes trays into orders, records
      manual expenses, edits or deletes them by id, and reconciles writes
      that failed to reach the store.

Finalizing a purchase re-checks every tray item against the live catalog,
decrements stock locally, and then sends the stock updates, the order, and
an automatic "Stock" expense through a write-ahead journal. Validation
failures leave everything untouched. A store failure after stock was
decremented keeps the undelivered writes in the journal; ``reconcile``
retries them and completes the purchase. Only one finalize or reconcile
runs at a time.
"""

from __future__ import annotations

import math
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar

from ..catalog import Product
from ..currency import Conversion, CurrencyConverter
from ..errors import (
    EmptyTray,
    InvalidAmount,
    ItemNoLongerAvailable,
    PendingWrites,
    PersistenceFailure,
    PurchaseInProgress,
    ValidationError,
)
from ..logging_utils import get_logger
from ..store import StoreBackend
from .journal import PendingWrite, WriteJournal, WriteKind
from .models import Expense, ExpenseType, Order, OrderStatus, TrayItem, parse_date
from .state import LedgerStore
from .tray import Tray

LOGGER = get_logger(__name__)

STOCK_COST_RATIO = 0.7
AUTO_EXPENSE_NAME = "Auto Stock Cost"
AUTO_EXPENSE_CATEGORY = "Stock"
EDITABLE_EXPENSE_FIELDS = frozenset({"name", "amount", "date", "category", "currency"})

RecordT = TypeVar("RecordT")


class LedgerState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    COMMITTING = "committing"
    FAILED = "failed"


@dataclass(slots=True)
class PurchaseReceipt:
    order: Order
    stock_expense: Expense

    def as_dict(self) -> Dict[str, object]:
        return {"order": self.order.as_dict(), "stock_expense": self.stock_expense.as_dict()}


@dataclass(slots=True)
class ExpenseReceipt:
    """Stored expense plus the currency conversion that produced its amount."""

    expense: Expense
    conversion: Optional[Conversion] = None

    @property
    def warning(self) -> Optional[str]:
        if self.conversion is None or self.conversion.warning is None:
            return None
        return self.conversion.warning.message

    def as_dict(self) -> Dict[str, object]:
        return {
            "expense": self.expense.as_dict(),
            "conversion": self.conversion.describe() if self.conversion else None,
            "warning": self.warning,
        }


def stock_cost_for(order_total: float, ratio: float = STOCK_COST_RATIO) -> float:
    """Assumed cost of goods for a sale, rounded half up to a whole unit."""

    return float(math.floor(order_total * ratio + 0.5))


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _require_text(value: object, field_name: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"Expense {field_name} is required.", details={"field": field_name})
    return text


def _parse_amount(value: object) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Expense amount is required.", details={"field": "amount"})
    if isinstance(value, bool):
        raise ValidationError("Expense amount must be a number.", details={"field": "amount"})
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        raise ValidationError("Expense amount must be a number.", details={"field": "amount"}) from error
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(
            "Expense amount must be greater than zero.", details={"amount": value}
        )
    return amount


class Ledger:
    """Turn trays into orders and keep the expense book in step with the store."""

    def __init__(
        self,
        store: LedgerStore,
        backend: StoreBackend,
        converter: CurrencyConverter,
        *,
        tray: Optional[Tray] = None,
        base_currency: Optional[str] = None,
        stock_cost_ratio: float = STOCK_COST_RATIO,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.backend = backend
        self.converter = converter
        self.tray = tray if tray is not None else Tray(store.catalog)
        self.base_currency = (base_currency or converter.base_currency).strip().upper()
        self.stock_cost_ratio = stock_cost_ratio
        self._today = today
        self._journal = WriteJournal()
        self._purchase_lock = threading.Lock()
        self._purchased_items: Tuple[TrayItem, ...] = ()
        self._state = LedgerState.IDLE

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def pending_writes(self) -> List[PendingWrite]:
        return self._journal.entries()

    def today(self) -> date:
        return self._today()

    def load(self) -> None:
        """Fetch products, orders and expenses from the store.

        A failing product fetch propagates; orders and expenses that cannot
        be fetched start empty, as a fresh shop would.
        """

        products = self._parse_records(self.backend.list_products(), Product.from_dict, "product")
        orders = self._fetch_or_empty(self.backend.list_orders, "orders")
        expenses = self._fetch_or_empty(self.backend.list_expenses, "expenses")
        self.store.catalog.replace_all(products)
        self.store.replace_orders(self._parse_records(orders, Order.from_dict, "order"))
        self.store.replace_expenses(self._parse_records(expenses, Expense.from_dict, "expense"))
        LOGGER.info(
            "Loaded %s products, %s orders, %s expenses",
            len(self.store.catalog),
            len(self.store.list_orders()),
            len(self.store.list_expenses()),
        )

    @staticmethod
    def _fetch_or_empty(fetch: Callable[[], List[Dict[str, Any]]], label: str) -> List[Dict[str, Any]]:
        try:
            return fetch()
        except PersistenceFailure as error:
            LOGGER.warning("No %s loaded (%s); starting fresh", label, error.message)
            return []

    @staticmethod
    def _parse_records(
        records: Iterable[Mapping[str, Any]],
        parser: Callable[[Mapping[str, Any]], RecordT],
        label: str,
    ) -> List[RecordT]:
        parsed: List[RecordT] = []
        for record in records:
            try:
                parsed.append(parser(record))
            except ValidationError as error:
                LOGGER.warning("Skipping unreadable %s record: %s", label, error.message)
        return parsed

    def finalize_purchase(self) -> PurchaseReceipt:
        """Convert the tray into a persisted order plus its stock-cost expense."""

        if not self._purchase_lock.acquire(blocking=False):
            raise PurchaseInProgress()
        try:
            if self._journal:
                raise PendingWrites(len(self._journal))
            if self.tray.is_empty:
                raise EmptyTray()

            self._state = LedgerState.VALIDATING
            try:
                items = self._validate_tray()
            except ItemNoLongerAvailable as error:
                self._state = LedgerState.FAILED
                LOGGER.warning("Purchase rejected: %s", error.message)
                raise

            self._state = LedgerState.COMMITTING
            order_total = sum((item.price for item in items), 0.0)
            order_date = self._today()
            order = Order(
                order_id=_new_id("order"),
                date=order_date,
                items=items,
                total_amount=order_total,
                status=OrderStatus.COMPLETED,
            )
            stock_expense = Expense(
                expense_id=_new_id("expense"),
                name=AUTO_EXPENSE_NAME,
                amount=stock_cost_for(order_total, self.stock_cost_ratio),
                date=order_date,
                category=AUTO_EXPENSE_CATEGORY,
                expense_type=ExpenseType.AUTO,
                order_id=order.order_id,
            )

            for item in items:
                product = self.store.catalog.decrement_stock(item.product_id)
                self._journal.record(
                    PendingWrite(WriteKind.UPDATE_PRODUCT, product.product_id, product.as_dict())
                )
            order_write = self._journal.record(
                PendingWrite(WriteKind.CREATE_ORDER, order.order_id, order.as_dict())
            )
            expense_write = self._journal.record(
                PendingWrite(WriteKind.CREATE_EXPENSE, stock_expense.expense_id, stock_expense.as_dict())
            )
            self._purchased_items = items

            try:
                self._journal.flush(self._apply_write)
            except PersistenceFailure:
                self._state = LedgerState.FAILED
                LOGGER.warning(
                    "Purchase %s committed locally but %s store write(s) are pending reconciliation",
                    order.order_id,
                    len(self._journal),
                )
                raise

            self._complete_purchase()
            LOGGER.info(
                "Purchase completed: order %s with %s item(s), total %.2f",
                order_write.result.order_id,
                len(items),
                order_total,
            )
            return PurchaseReceipt(order=order_write.result, stock_expense=expense_write.result)
        finally:
            self._purchase_lock.release()

    def reconcile(self) -> int:
        """Retry store writes left over from a partially persisted purchase."""

        if not self._purchase_lock.acquire(blocking=False):
            raise PurchaseInProgress()
        try:
            if not self._journal:
                return 0
            delivered = self._journal.flush(self._apply_write)
            self._complete_purchase()
            LOGGER.info("Reconciled %s pending store write(s)", delivered)
            return delivered
        finally:
            self._purchase_lock.release()

    def _validate_tray(self) -> Tuple[TrayItem, ...]:
        items = self.tray.items
        for item in items:
            product = self.store.catalog.get(item.product_id)
            if product is None or product.available <= 0:
                raise ItemNoLongerAvailable(item.product_id, item.name)
        return items

    def _complete_purchase(self) -> None:
        if self._purchased_items:
            # Items added after the purchase was validated stay in the tray.
            self.tray.discard(self._purchased_items)
            self._purchased_items = ()
        self._state = LedgerState.IDLE

    def _apply_write(self, write: PendingWrite) -> Any:
        if write.kind is WriteKind.UPDATE_PRODUCT:
            return self.backend.update_product(write.key, write.payload)
        if write.kind is WriteKind.CREATE_ORDER:
            order = self._parse_echo(Order.from_dict, self.backend.create_order(write.payload))
            self.store.append_order(order)
            if order.order_id != write.key:
                # The store assigned its own id; point queued stock expenses at it.
                for pending in self._journal.entries():
                    if pending.kind is WriteKind.CREATE_EXPENSE and pending.payload.get("orderId") == write.key:
                        pending.payload["orderId"] = order.order_id
            return order
        expense = self._parse_echo(Expense.from_dict, self.backend.create_expense(write.payload))
        self.store.append_expense(expense)
        return expense

    @staticmethod
    def _parse_echo(parser: Callable[[Mapping[str, Any]], RecordT], record: Mapping[str, Any]) -> RecordT:
        try:
            return parser(record)
        except ValidationError as error:
            raise PersistenceFailure(f"Store echoed an unreadable record: {error.message}") from error

    def add_manual_expense(
        self,
        name: object,
        amount: object,
        expense_date: object,
        category: object,
        currency: Optional[str] = None,
    ) -> ExpenseReceipt:
        """Validate, convert and persist a user-entered expense."""

        expense, conversion = self._build_manual_expense(
            _new_id("expense"), name, amount, expense_date, category, currency
        )
        stored = self._parse_echo(Expense.from_dict, self.backend.create_expense(expense.as_dict()))
        self.store.append_expense(stored)
        LOGGER.info("Expense added: %s %.2f %s", stored.name, stored.amount, self.base_currency)
        return ExpenseReceipt(expense=stored, conversion=conversion)

    def update_expense(self, expense_id: str, fields: Mapping[str, object]) -> ExpenseReceipt:
        """Edit a manual expense in place, keyed by its stable id."""

        unknown = sorted(set(fields) - EDITABLE_EXPENSE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Expense field(s) {', '.join(unknown)} cannot be edited.", details={"fields": unknown}
            )
        existing = self.store.find_expense(expense_id)
        if existing.is_auto:
            raise ValidationError(f"Automatic expense {expense_id} cannot be edited.")

        conversion: Optional[Conversion] = None
        if "amount" in fields or "currency" in fields:
            previous_amount = (
                existing.original_amount if existing.original_amount is not None else existing.amount
            )
            updated, conversion = self._build_manual_expense(
                existing.expense_id,
                fields.get("name", existing.name),
                fields.get("amount", previous_amount),
                fields.get("date", existing.date),
                fields.get("category", existing.category),
                fields.get("currency", existing.original_currency or self.base_currency),
            )
        else:
            updated = replace(
                existing,
                name=_require_text(fields.get("name", existing.name), "name"),
                date=parse_date(fields.get("date", existing.date)),
                category=_require_text(fields.get("category", existing.category), "category"),
            )

        stored = self._parse_echo(
            Expense.from_dict, self.backend.update_expense(expense_id, updated.as_dict())
        )
        self.store.replace_expense(stored)
        LOGGER.info("Expense %s updated", expense_id)
        return ExpenseReceipt(expense=stored, conversion=conversion)

    def delete_expense(self, expense_id: str) -> Expense:
        existing = self.store.find_expense(expense_id)
        if existing.is_auto:
            raise ValidationError(f"Automatic expense {expense_id} cannot be deleted.")
        self.backend.delete_expense(expense_id)
        removed = self.store.remove_expense(expense_id)
        LOGGER.info("Expense %s deleted", expense_id)
        return removed

    def _build_manual_expense(
        self,
        expense_id: str,
        name: object,
        amount: object,
        expense_date: object,
        category: object,
        currency: object,
    ) -> Tuple[Expense, Conversion]:
        missing = [
            field_name
            for field_name, value in (
                ("name", name),
                ("amount", amount),
                ("date", expense_date),
                ("category", category),
            )
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(
                f"Please fill in all expense fields (missing: {', '.join(missing)}).",
                details={"missing": missing},
            )
        clean_name = _require_text(name, "name")
        clean_category = _require_text(category, "category")
        parsed_date = parse_date(expense_date)
        value = _parse_amount(amount)
        source_currency = str(currency or self.base_currency).strip().upper()

        conversion = self.converter.convert_detailed(value, source_currency, self.base_currency)
        foreign = source_currency != self.base_currency
        expense = Expense(
            expense_id=expense_id,
            name=clean_name,
            amount=conversion.amount,
            date=parsed_date,
            category=clean_category,
            expense_type=ExpenseType.MANUAL,
            original_amount=value if foreign else None,
            original_currency=source_currency if foreign else None,
        )
        return expense, conversion
