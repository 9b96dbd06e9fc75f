"""Mini README: Tests for currency conversion and rate sources.

Structure:
    * converter tests - identity fast path, cross rates, fail-open warnings.
    * normalise_rate_table tests - envelope handling and bad values.
    * HttpRateSource tests - httpx MockTransport driven fetches.
"""

from __future__ import annotations

import httpx
import pytest

from trayledger.currency import (
    CurrencyConverter,
    HttpRateSource,
    StaticRateSource,
    normalise_rate_table,
)
from trayledger.errors import RateUnavailable

from conftest import CountingRateSource


@pytest.mark.parametrize("amount", [0.0, 1.0, 1234.56])
@pytest.mark.parametrize("currency", ["KES", "USD", "xyz"])
def test_same_currency_is_identity_without_lookup(amount: float, currency: str) -> None:
    source = CountingRateSource({})
    converter = CurrencyConverter(source)

    assert converter.convert(amount, currency, currency) == amount
    assert source.calls == 0


def test_converts_through_common_base() -> None:
    converter = CurrencyConverter(StaticRateSource({"USD": 1.0, "KES": 130.0, "EUR": 0.5}))

    assert converter.convert(50, "USD") == pytest.approx(6500.0)
    assert converter.convert(10, "eur", "kes") == pytest.approx(2600.0)
    assert converter.convert(2600, "KES", "EUR") == pytest.approx(10.0)


def test_missing_rate_fails_open_with_warning() -> None:
    converter = CurrencyConverter(StaticRateSource({"USD": 1.0, "KES": 130.0}))

    conversion = converter.convert_detailed(75.0, "JPY")

    assert conversion.amount == 75.0
    assert isinstance(conversion.warning, RateUnavailable)
    assert conversion.warning.missing == ("JPY",)
    assert not conversion.converted
    assert "JPY" in conversion.describe()
    assert converter.convert(75.0, "JPY") == 75.0


def test_empty_rate_table_fails_open() -> None:
    converter = CurrencyConverter(StaticRateSource({}))

    conversion = converter.convert_detailed(20.0, "USD", "KES")

    assert conversion.amount == 20.0
    assert conversion.warning is not None
    assert set(conversion.warning.missing) == {"USD", "KES"}


def test_describe_successful_conversion() -> None:
    converter = CurrencyConverter(StaticRateSource({"USD": 1.0, "KES": 130.0}))

    conversion = converter.convert_detailed(50, "USD")

    assert conversion.converted
    assert conversion.rate == pytest.approx(130.0)
    assert conversion.describe() == "50.00 USD converted to 6,500.00 KES"


def test_normalise_rate_table_handles_envelope_and_bad_values() -> None:
    payload = {
        "base": "USD",
        "rates": {"usd": 1, "KES": 129.5, "EUR": "0.9", "GBP": -1, "JPY": True, "CHF": float("nan")},
    }

    assert normalise_rate_table(payload) == {"USD": 1.0, "KES": 129.5}
    assert normalise_rate_table({"KES": 130}) == {"KES": 130.0}
    assert normalise_rate_table(["KES", 130]) == {}
    assert normalise_rate_table({"rates": "broken"}) == {}


def test_http_rate_source_fetches_base_table() -> None:
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json={"base": "USD", "rates": {"KES": 130.0, "EUR": 0.5}})

    source = HttpRateSource(
        "https://rates.test/latest/",
        base_currency="usd",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    assert source.fetch_rates() == {"KES": 130.0, "EUR": 0.5, "USD": 1.0}
    assert requested == ["https://rates.test/latest/USD"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "down"}),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json={"rates": {}}),
    ],
)
def test_http_rate_source_degrades_to_empty_table(response: httpx.Response) -> None:
    source = HttpRateSource(
        "https://rates.test/latest",
        client=httpx.Client(transport=httpx.MockTransport(lambda request: response)),
    )

    assert source.fetch_rates() == {}


def test_http_rate_source_network_error_fails_open() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    converter = CurrencyConverter(
        HttpRateSource(
            "https://rates.test/latest",
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
    )

    assert converter.convert(50, "USD") == 50
