"""Mini README: Wiring of settings, store, converter and ledger.

``build_ledger`` assembles one application context: a ``LedgerStore``
passed by reference to the tray and ledger, a store backend (the REST
client, or the seeded in-memory store in demo mode), and a currency
converter reading either the live rate service or a fixed demo table.
"""

from __future__ import annotations

from typing import Dict, Optional

from .configuration import TrayLedgerSettings, get_settings
from .currency import CurrencyConverter, HttpRateSource, RateSource, StaticRateSource
from .ledger import Ledger, LedgerStore
from .logging_utils import get_logger
from .store import InMemoryStoreBackend, StoreBackend, StoreClient

LOGGER = get_logger(__name__)

# Units per US dollar, used when running without the live rate service.
DEMO_RATES: Dict[str, float] = {"USD": 1.0, "KES": 129.5, "EUR": 0.92, "GBP": 0.79}


def build_ledger(
    settings: Optional[TrayLedgerSettings] = None,
    *,
    backend: Optional[StoreBackend] = None,
    rate_source: Optional[RateSource] = None,
    demo: bool = False,
    load: bool = True,
) -> Ledger:
    """Create a ledger for one session and optionally load the store."""

    settings = settings or get_settings()
    demo = demo or settings.demo_mode
    if backend is None:
        backend = (
            InMemoryStoreBackend(seed_demo=True)
            if demo
            else StoreClient(settings.store_base_url, timeout=settings.request_timeout_seconds)
        )
    if rate_source is None:
        rate_source = (
            StaticRateSource(DEMO_RATES)
            if demo
            else HttpRateSource(
                settings.rates_base_url,
                base_currency=settings.rates_base_currency,
                timeout=settings.request_timeout_seconds,
            )
        )

    ledger = Ledger(
        LedgerStore(),
        backend,
        CurrencyConverter(rate_source, base_currency=settings.base_currency),
        stock_cost_ratio=settings.stock_cost_ratio,
    )
    LOGGER.debug("Ledger built (demo=%s, backend=%s)", demo, type(backend).__name__)
    if load:
        ledger.load()
    return ledger
