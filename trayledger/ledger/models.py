"""Mini README: Records produced and consumed by the ledger.

Structure:
    * OrderStatus / ExpenseType - enums mirroring the store's string values.
    * TrayItem - price snapshot of a product taken when it enters the tray.
    * Order - immutable record of a finalized purchase.
    * Expense - manual or automatically generated cost entry.
    * parse_date - accepts ISO strings, dates and datetimes.

Each record converts to and from the store's JSON shape (``totalAmount``,
``originalCurrency`` and friends) through ``from_dict``/``as_dict`` so the
rest of the package works with typed values only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from ..errors import ValidationError


class OrderStatus(str, Enum):
    COMPLETED = "completed"


class ExpenseType(str, Enum):
    """Whether an expense was entered by a user or generated by a purchase."""

    MANUAL = "manual"
    AUTO = "auto"

    @classmethod
    def from_str(cls, value: str) -> "ExpenseType":
        """Coerce arbitrary casing into a valid expense type."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValidationError(f"Unsupported expense type: {value}") from error


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as error:
            raise ValidationError(f"Invalid date {value!r}; expected YYYY-MM-DD.") from error
    raise ValidationError("Dates must be provided as ISO strings or date/datetime instances.")


def _optional_float(value: object) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class TrayItem:
    """A product reference plus the price locked in when it was added."""

    product_id: str
    name: str
    price: float

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "TrayItem":
        try:
            product_id = payload["productId"] if "productId" in payload else payload["id"]
            return cls(
                product_id=str(product_id),
                name=str(payload["name"]),
                price=float(payload["price"]),  # type: ignore[arg-type]
            )
        except (KeyError, TypeError, ValueError) as error:
            raise ValidationError(f"Order item is malformed: {error}") from error

    def as_dict(self) -> Dict[str, object]:
        return {"id": self.product_id, "name": self.name, "price": self.price}


@dataclass(frozen=True, slots=True)
class Order:
    order_id: str
    date: date
    items: Tuple[TrayItem, ...]
    total_amount: float
    status: OrderStatus = OrderStatus.COMPLETED

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Order":
        """Build an order from a stored or echoed JSON record."""

        try:
            items = tuple(TrayItem.from_dict(item) for item in payload.get("items") or [])  # type: ignore[union-attr]
            total = payload.get("totalAmount")
            return cls(
                order_id=str(payload["id"]),
                date=parse_date(payload["date"]),
                items=items,
                total_amount=float(total) if total is not None else sum(item.price for item in items),  # type: ignore[arg-type]
                status=OrderStatus(str(payload.get("status") or OrderStatus.COMPLETED.value)),
            )
        except KeyError as error:
            raise ValidationError(f"Order record is missing field {error.args[0]!r}.") from error
        except (TypeError, ValueError) as error:
            raise ValidationError(f"Order record is malformed: {error}") from error

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.order_id,
            "date": self.date.isoformat(),
            "items": [item.as_dict() for item in self.items],
            "totalAmount": self.total_amount,
            "status": self.status.value,
        }


@dataclass(frozen=True, slots=True)
class Expense:
    """A cost entry stored in the base currency.

    ``original_amount``/``original_currency`` are set only for expenses
    entered in another currency. ``order_id`` links automatic stock-cost
    expenses to the order that produced them.
    """

    expense_id: str
    name: str
    amount: float
    date: date
    category: str
    expense_type: ExpenseType = ExpenseType.MANUAL
    original_amount: Optional[float] = None
    original_currency: Optional[str] = None
    order_id: Optional[str] = None

    @property
    def is_auto(self) -> bool:
        return self.expense_type is ExpenseType.AUTO

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Expense":
        try:
            original_currency = payload.get("originalCurrency")
            order_id = payload.get("orderId")
            return cls(
                expense_id=str(payload["id"]),
                name=str(payload["name"]),
                amount=float(payload["amount"]),  # type: ignore[arg-type]
                date=parse_date(payload["date"]),
                category=str(payload["category"]),
                expense_type=ExpenseType.from_str(str(payload.get("type") or ExpenseType.MANUAL.value)),
                original_amount=_optional_float(payload.get("originalAmount")),
                original_currency=str(original_currency) if original_currency else None,
                order_id=str(order_id) if order_id else None,
            )
        except KeyError as error:
            raise ValidationError(f"Expense record is missing field {error.args[0]!r}.") from error
        except (TypeError, ValueError) as error:
            raise ValidationError(f"Expense record is malformed: {error}") from error

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "id": self.expense_id,
            "name": self.name,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "category": self.category,
            "type": self.expense_type.value,
            "originalAmount": self.original_amount,
            "originalCurrency": self.original_currency,
        }
        if self.order_id is not None:
            payload["orderId"] = self.order_id
        return payload
