"""Mini README: Centralised configuration models and helpers for Tray Ledger.

Structure:
    * TrayLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read the store and exchange-rate endpoints,
    the base currency, ledger policy values, and the interface bind
    address. Values come from ``TRAYLEDGER_`` prefixed environment variables
    or a local ``.env`` file and are validated once per process.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class TrayLedgerSettings(BaseSettings):
    """Runtime configuration for the storefront ledger."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    store_base_url: str = Field(
        "http://127.0.0.1:3000",
        description="Base URL of the JSON store exposing /products, /orders and /expenses.",
    )
    rates_base_url: str = Field(
        "https://api.exchangerate-api.com/v4/latest",
        description="Exchange-rate service queried as <rates_base_url>/<currency code>.",
    )
    rates_base_currency: str = Field(
        "USD",
        description="Currency the rate table is requested relative to.",
    )
    base_currency: str = Field(
        "KES",
        description="Currency every stored monetary amount is normalised to.",
    )
    stock_cost_ratio: float = Field(
        0.7,
        description="Share of a sale recorded as automatic stock cost.",
        ge=0.0,
        le=1.0,
    )
    low_stock_threshold: int = Field(
        5,
        description="Products at or below this availability are flagged as low stock.",
        ge=0,
    )
    request_timeout_seconds: float = Field(
        10.0,
        description="Timeout applied to store and exchange-rate requests.",
        gt=0,
    )
    demo_mode: bool = Field(
        False,
        description="Serve a seeded in-memory store and fixed exchange rates instead of the network.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the JSON service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the JSON service exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "TRAYLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("base_currency", "rates_base_currency", pre=True)
    def _normalise_currency(cls, value: str) -> str:
        """Currency codes are compared upper-case throughout the ledger."""

        code = str(value).strip().upper()
        if not code:
            raise ValueError("Currency codes must not be empty.")
        return code

    @validator("store_base_url", "rates_base_url")
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache()
def get_settings() -> TrayLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return TrayLedgerSettings()
