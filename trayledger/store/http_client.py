"""Mini README: httpx client for the storefront's REST store.

Structure:
    * StoreClient - ``StoreBackend`` implementation over ``httpx.Client``.

Endpoints consumed: ``GET /products``, ``GET /expenses``, ``GET /orders``,
``POST /orders``, ``POST /expenses``, ``PUT /products/{id}``,
``PUT /expenses/{id}`` and ``DELETE /expenses/{id}``. Any transport error,
non-2xx status, or missing/non-JSON echo on a write raises
``PersistenceFailure``; nothing is assumed to have persisted unless the
store says so. List endpoints answering 404 or ``null`` count as empty.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ..errors import PersistenceFailure
from ..logging_utils import get_logger
from .base import StoreBackend

LOGGER = get_logger(__name__)


class StoreClient(StoreBackend):
    """Talk to the JSON store with a persistent synchronous httpx client."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        LOGGER.debug("Store client targeting %s", self.base_url)

    def __enter__(self) -> "StoreClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        *,
        allow_missing: bool = False,
    ) -> Any:
        LOGGER.debug("Store %s %s", method, path)
        try:
            response = self._client.request(method, path, json=payload)
        except httpx.HTTPError as error:
            raise PersistenceFailure(
                f"Store request {method} {path} failed: {error}",
                details={"method": method, "path": path},
            ) from error

        if allow_missing and response.status_code == 404:
            return None
        if response.is_error:
            raise PersistenceFailure(
                f"Store request {method} {path} returned HTTP {response.status_code}.",
                details={"method": method, "path": path, "status_code": response.status_code},
            )
        if method == "DELETE" or not response.content:
            return None
        try:
            return response.json()
        except ValueError as error:
            raise PersistenceFailure(
                f"Store response to {method} {path} was not valid JSON.",
                details={"method": method, "path": path},
            ) from error

    def _list(self, path: str) -> List[Dict[str, Any]]:
        body = self._request("GET", path, allow_missing=True)
        if body is None:
            return []
        if not isinstance(body, list):
            raise PersistenceFailure(
                f"Store response to GET {path} was not a list.", details={"path": path}
            )
        return [record for record in body if isinstance(record, dict)]

    def _write(self, method: str, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = self._request(method, path, payload)
        if not isinstance(body, dict):
            raise PersistenceFailure(
                f"Store did not echo the record for {method} {path}; treating it as not persisted.",
                details={"method": method, "path": path},
            )
        return body

    def list_products(self) -> List[Dict[str, Any]]:
        return self._list("/products")

    def list_expenses(self) -> List[Dict[str, Any]]:
        return self._list("/expenses")

    def list_orders(self) -> List[Dict[str, Any]]:
        return self._list("/orders")

    def create_order(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._write("POST", "/orders", payload)

    def create_expense(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._write("POST", "/expenses", payload)

    def update_product(self, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._write("PUT", f"/products/{product_id}", payload)

    def update_expense(self, expense_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._write("PUT", f"/expenses/{expense_id}", payload)

    def delete_expense(self, expense_id: str) -> None:
        self._request("DELETE", f"/expenses/{expense_id}")
