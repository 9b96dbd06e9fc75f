"""Mini README: Currency conversion helpers.

Groups the ``CurrencyConverter`` with the rate sources it can read from:
a fixed ``StaticRateSource`` and the httpx backed ``HttpRateSource``.
"""

from .converter import (
    DEFAULT_BASE_CURRENCY,
    Conversion,
    CurrencyConverter,
    HttpRateSource,
    RateSource,
    StaticRateSource,
    normalise_rate_table,
)

__all__ = [
    "DEFAULT_BASE_CURRENCY",
    "Conversion",
    "CurrencyConverter",
    "HttpRateSource",
    "RateSource",
    "StaticRateSource",
    "normalise_rate_table",
]
