"""Mini README: Currency conversion into the ledger's base currency.

Structure:
    * RateSource - abstract supplier of a currency -> rate table.
    * StaticRateSource - fixed table, handy for demos and tests.
    * HttpRateSource - fetches ``<base_url>/<base currency>`` with httpx.
    * normalise_rate_table - cleans bare or ``{"rates": ...}`` payloads.
    * Conversion - outcome of one conversion including any warning.
    * CurrencyConverter - converts amounts through the common rate base.

Rates are expressed per unit of the table's base currency, so converting
goes through that base: ``(amount / rate[source]) * rate[target]``.
Converting a currency into itself never touches the rate source. When
either rate is missing the converter fails open: the original amount is
returned together with a ``RateUnavailable`` warning for the caller to
surface.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import httpx

from ..errors import RateUnavailable
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_BASE_CURRENCY = "KES"


def normalise_currency(code: str) -> str:
    return str(code).strip().upper()


def normalise_rate_table(payload: object) -> Dict[str, float]:
    """Extract usable positive rates from a rate-service response.

    Accepts either a bare ``{"USD": 1.0, ...}`` mapping or the common
    ``{"base": "USD", "rates": {...}}`` envelope. Anything that is not a
    finite positive number is dropped; a malformed payload yields ``{}``.
    """

    if not isinstance(payload, Mapping):
        return {}
    rates = payload.get("rates", payload)
    if not isinstance(rates, Mapping):
        return {}
    table: Dict[str, float] = {}
    for code, value in rates.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if not math.isfinite(value) or value <= 0:
            continue
        table[normalise_currency(code)] = float(value)
    return table


class RateSource(ABC):
    """Supplier of exchange rates relative to a single base currency."""

    @abstractmethod
    def fetch_rates(self) -> Dict[str, float]:
        """Return the current rate table; an empty table means no rates."""


class StaticRateSource(RateSource):
    """Serve a fixed rate table."""

    def __init__(self, rates: Mapping[str, float]) -> None:
        self._rates = normalise_rate_table(dict(rates))

    def fetch_rates(self) -> Dict[str, float]:
        return dict(self._rates)


class HttpRateSource(RateSource):
    """Fetch rates from an exchangerate-api style HTTP endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        base_currency: str = "USD",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.base_currency = normalise_currency(base_currency)
        self._client = client or httpx.Client(timeout=timeout, headers={"Accept": "application/json"})

    def close(self) -> None:
        self._client.close()

    def fetch_rates(self) -> Dict[str, float]:
        url = f"{self.base_url}/{self.base_currency}"
        try:
            response = self._client.get(url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as error:
            LOGGER.warning("Exchange-rate lookup at %s failed: %s", url, error)
            return {}
        table = normalise_rate_table(payload)
        if table:
            table.setdefault(self.base_currency, 1.0)
        else:
            LOGGER.warning("Exchange-rate service at %s returned no usable rates", url)
        return table


@dataclass(slots=True)
class Conversion:
    """Result of converting an amount, including the fail-open warning."""

    amount: float
    original_amount: float
    from_currency: str
    to_currency: str
    rate: Optional[float] = None
    warning: Optional[RateUnavailable] = None

    @property
    def converted(self) -> bool:
        return self.warning is None and self.from_currency != self.to_currency

    def describe(self) -> str:
        """Human-readable summary suitable for a notification."""

        if self.warning is not None:
            return f"{self.warning.message} Using {self.original_amount:,.2f} {self.from_currency}."
        if not self.converted:
            return f"{self.amount:,.2f} {self.to_currency}"
        return (
            f"{self.original_amount:,.2f} {self.from_currency} converted to "
            f"{self.amount:,.2f} {self.to_currency}"
        )


class CurrencyConverter:
    """Convert amounts into the base currency using a ``RateSource``."""

    def __init__(self, rate_source: RateSource, base_currency: str = DEFAULT_BASE_CURRENCY) -> None:
        self._rate_source = rate_source
        self.base_currency = normalise_currency(base_currency)

    def convert(
        self, amount: float, from_currency: str, to_currency: Optional[str] = None
    ) -> float:
        """Return the converted amount, or ``amount`` itself when rates are missing."""

        return self.convert_detailed(amount, from_currency, to_currency).amount

    def convert_detailed(
        self, amount: float, from_currency: str, to_currency: Optional[str] = None
    ) -> Conversion:
        source = normalise_currency(from_currency)
        target = normalise_currency(to_currency) if to_currency else self.base_currency
        if source == target:
            return Conversion(amount, amount, source, target, rate=1.0)

        rates = self._rate_source.fetch_rates()
        missing = [code for code in (source, target) if code not in rates]
        if missing:
            warning = RateUnavailable(source, target, missing)
            LOGGER.warning("Currency conversion failed open: %s", warning.message)
            return Conversion(amount, amount, source, target, warning=warning)

        rate = rates[target] / rates[source]
        converted = (amount / rates[source]) * rates[target]
        LOGGER.debug("Converted %s %s to %s %s", amount, source, converted, target)
        return Conversion(converted, amount, source, target, rate=rate)
