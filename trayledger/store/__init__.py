"""Mini README: Persistence backends for the storefront ledger.

``StoreBackend`` describes what the ledger needs from the external JSON
store. ``StoreClient`` speaks to the real REST service over httpx while
``InMemoryStoreBackend`` serves demos and tests.
"""

from .base import StoreBackend
from .http_client import StoreClient
from .memory import DEMO_PRODUCTS, InMemoryStoreBackend

__all__ = ["DEMO_PRODUCTS", "InMemoryStoreBackend", "StoreBackend", "StoreClient"]
