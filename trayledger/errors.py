"""Mini README: Error taxonomy shared by every Tray Ledger component.

Structure:
    * TrayLedgerError - base class carrying message, code, details and an
      HTTP status hint for the JSON interface.
    * ValidationError / InvalidAmount - rejected user input.
    * NotFound / ItemNoLongerAvailable - referential failures.
    * TrayError family and OutOfStock - tray and catalog preconditions.
    * RateUnavailable - fail-open currency conversion warning.
    * PersistenceFailure / PendingWrites - external store problems.
    * PurchaseInProgress - a second finalize while one is running.

Every error is recoverable at the call site. Messages name the failed
precondition so the view layer can show them verbatim.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence


class TrayLedgerError(Exception):
    """Base class for all storefront ledger failures."""

    code = "trayledger_error"
    http_status = 400

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ValidationError(TrayLedgerError):
    """Raised when user input is missing or malformed."""

    code = "validation_error"


class InvalidAmount(ValidationError):
    """Raised when a monetary amount is not strictly positive."""

    code = "invalid_amount"


class NotFound(TrayLedgerError):
    """Raised when a product or expense id is unknown."""

    code = "not_found"
    http_status = 404


class ItemNoLongerAvailable(NotFound):
    """Raised when a tray item's product vanished or sold out before checkout."""

    code = "item_no_longer_available"
    http_status = 409

    def __init__(self, product_id: str, name: str) -> None:
        super().__init__(
            f"{name} is no longer available.",
            details={"product_id": product_id, "name": name},
        )
        self.product_id = product_id
        self.name = name


class TrayError(TrayLedgerError):
    """Base class for tray precondition violations."""

    code = "tray_error"
    http_status = 409


class AlreadyInTray(TrayError):
    code = "already_in_tray"

    def __init__(self, product_id: str, name: str) -> None:
        super().__init__(
            f"{name} is already in your tray.",
            details={"product_id": product_id, "name": name},
        )
        self.product_id = product_id


class Unavailable(TrayError):
    code = "unavailable"

    def __init__(self, product_id: str, name: str) -> None:
        super().__init__(
            f"{name} is not available.",
            details={"product_id": product_id, "name": name},
        )
        self.product_id = product_id


class IndexOutOfRange(TrayError):
    code = "index_out_of_range"
    http_status = 404

    def __init__(self, index: int, length: int) -> None:
        super().__init__(
            f"Tray position {index} is out of range for a tray of {length} item(s).",
            details={"index": index, "length": length},
        )
        self.index = index


class EmptyTray(TrayError):
    code = "empty_tray"
    http_status = 400

    def __init__(self) -> None:
        super().__init__("Your tray is empty.")


class OutOfStock(TrayLedgerError):
    """Raised when stock is decremented for a product with nothing available."""

    code = "out_of_stock"
    http_status = 409

    def __init__(self, product_id: str, name: str) -> None:
        super().__init__(
            f"{name} is out of stock.",
            details={"product_id": product_id, "name": name},
        )
        self.product_id = product_id


class RateUnavailable(TrayLedgerError):
    """Describes a conversion that fell back to the unconverted amount."""

    code = "rate_unavailable"
    http_status = 503

    def __init__(self, from_currency: str, to_currency: str, missing: Sequence[str]) -> None:
        super().__init__(
            f"Exchange rate for {', '.join(missing)} unavailable; "
            f"{from_currency} amount kept unconverted instead of {to_currency}.",
            details={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "missing": list(missing),
            },
        )
        self.missing = tuple(missing)


class PersistenceFailure(TrayLedgerError):
    """Raised when the external store is unreachable or rejects a write."""

    code = "persistence_failure"
    http_status = 502


class PendingWrites(PersistenceFailure):
    """Raised when a purchase is refused until earlier writes are reconciled."""

    code = "pending_writes"
    http_status = 409

    def __init__(self, pending: int) -> None:
        super().__init__(
            f"{pending} write(s) from an earlier purchase have not reached the store; "
            "reconcile before finalizing again.",
            details={"pending": pending},
        )
        self.pending = pending


class PurchaseInProgress(TrayLedgerError):
    """Raised when a finalize is triggered while another is still running."""

    code = "purchase_in_progress"
    http_status = 409

    def __init__(self) -> None:
        super().__init__("A purchase is already being finalized.")
