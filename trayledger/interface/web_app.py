"""Mini README: FastAPI service exposing the storefront ledger as JSON.

Structure:
    * create_application - application factory wiring routes to a Ledger.
    * ledger error handler - maps TrayLedgerError onto its HTTP status.

The service is the read/write surface for an external view layer: it
lists the catalog with stock badges, manipulates the tray, finalizes
purchases, records and edits expenses, and returns report figures with
chart-ready series. Rendering and formatting stay with the client.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Form, Request
from fastapi.responses import JSONResponse

from ..application import build_ledger
from ..catalog import stock_level
from ..configuration import get_settings
from ..errors import TrayLedgerError
from ..ledger import Ledger
from ..logging_utils import get_logger
from ..reporting import build_report

LOGGER = get_logger(__name__)


def create_application(ledger: Optional[Ledger] = None) -> FastAPI:
    """Create the FastAPI application bound to ``ledger``."""

    settings = get_settings()
    if ledger is None:
        ledger = build_ledger(settings)
    app = FastAPI(title="Tray Ledger Storefront", version="0.1.0")

    @app.exception_handler(TrayLedgerError)
    async def ledger_error(request: Request, error: TrayLedgerError) -> JSONResponse:
        LOGGER.info("%s %s rejected: %s", request.method, request.url.path, error.message)
        return JSONResponse(status_code=error.http_status, content=error.to_dict())

    def tray_payload() -> Dict[str, Any]:
        return ledger.tray.as_dict()

    @app.get("/products")
    async def products() -> JSONResponse:
        """Return the catalog with stock-level badges."""

        payload = []
        for product in ledger.store.catalog.list_products():
            level = stock_level(product, settings.low_stock_threshold)
            payload.append(
                {**product.as_dict(), "stock_level": level.value, "stock_label": level.label}
            )
        return JSONResponse({"products": payload})

    @app.get("/tray")
    async def tray() -> JSONResponse:
        return JSONResponse(tray_payload())

    @app.post("/tray/items")
    async def add_to_tray(product_id: str = Form(...)) -> JSONResponse:
        item = ledger.tray.add_by_id(product_id)
        return JSONResponse({"added": item.as_dict(), "tray": tray_payload()}, status_code=201)

    @app.delete("/tray/items/{index}")
    async def remove_from_tray(index: int) -> JSONResponse:
        item = ledger.tray.remove_at(index)
        return JSONResponse({"removed": item.as_dict(), "tray": tray_payload()})

    @app.post("/tray/finalize")
    def finalize() -> JSONResponse:
        receipt = ledger.finalize_purchase()
        return JSONResponse(receipt.as_dict(), status_code=201)

    @app.post("/reconcile")
    def reconcile() -> JSONResponse:
        delivered = ledger.reconcile()
        return JSONResponse(
            {
                "delivered": delivered,
                "pending": [write.as_dict() for write in ledger.pending_writes],
                "tray": tray_payload(),
            }
        )

    @app.get("/orders")
    async def orders() -> JSONResponse:
        return JSONResponse({"orders": [order.as_dict() for order in ledger.store.list_orders()]})

    @app.get("/expenses")
    async def expenses() -> JSONResponse:
        return JSONResponse(
            {"expenses": [expense.as_dict() for expense in ledger.store.list_expenses()]}
        )

    @app.post("/expenses")
    def add_expense(
        name: str = Form(...),
        amount: str = Form(...),
        date: str = Form(...),
        category: str = Form(...),
        currency: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Record a manual expense, converting foreign amounts to the base currency."""

        receipt = ledger.add_manual_expense(name, amount, date, category, currency)
        return JSONResponse(receipt.as_dict(), status_code=201)

    @app.put("/expenses/{expense_id}")
    def update_expense(expense_id: str, fields: Dict[str, Any] = Body(...)) -> JSONResponse:
        receipt = ledger.update_expense(expense_id, fields)
        return JSONResponse(receipt.as_dict())

    @app.delete("/expenses/{expense_id}")
    def delete_expense(expense_id: str) -> JSONResponse:
        removed = ledger.delete_expense(expense_id)
        return JSONResponse({"deleted": removed.as_dict()})

    @app.get("/reports")
    async def reports() -> JSONResponse:
        snapshot = build_report(
            ledger.store.list_orders(), ledger.store.list_expenses(), today=ledger.today()
        )
        return JSONResponse(snapshot.as_dict())

    return app
