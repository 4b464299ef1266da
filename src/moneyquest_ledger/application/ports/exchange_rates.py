"""Ports for exchange rate storage and providers."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol

from moneyquest_ledger.domain.models import ExchangeRate


@dataclass(frozen=True)
class FxQuote:
    """Latest quotes from an FX provider for one base currency."""

    base_currency: str
    rates: dict[str, Decimal]
    quote_date: date | None = None


class ExchangeRateSourcePort(Protocol):
    """Rates as seen by the conversion core."""

    def fetch_rates(self) -> list[ExchangeRate]:
        """Return every stored directional rate."""

    def refresh_rates(self) -> None:
        """Ask the backend to recompute rates from the provider."""


class ExchangeRateStorePort(Protocol):
    """Persistent rate table written by the refresh job."""

    def fetch_rates(self) -> list[ExchangeRate]:
        """Return every stored directional rate."""

    def upsert_rates(self, rates: list[ExchangeRate]) -> int:
        """Insert or update rates keyed by (base, target)."""


class FxProviderPort(Protocol):
    """Third-party source of market rates."""

    def fetch_latest(self, base_currency: str, symbols: list[str]) -> FxQuote:
        """Return the latest rates from `base_currency` into `symbols`."""


__all__ = [
    "FxQuote",
    "ExchangeRateSourcePort",
    "ExchangeRateStorePort",
    "FxProviderPort",
]
