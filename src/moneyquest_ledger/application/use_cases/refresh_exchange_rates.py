"""Use case recomputing stored exchange rates from a market provider.

The provider quotes every supported currency against a single anchor
(EUR, the ECB reference currency). Each directional pair is derived from
those quotes and upserted into the rate store.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone

from moneyquest_ledger.application.ports.exchange_rates import (
    ExchangeRateStorePort,
    FxProviderPort,
)
from moneyquest_ledger.domain.models import SUPPORTED_CURRENCIES, ExchangeRate
from moneyquest_ledger.domain.services.fx import build_cross_rates
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger

ANCHOR_CURRENCY = "EUR"


@dataclass(frozen=True)
class RefreshExchangeRatesResult:
    """Outcome of a refresh run."""

    pair_count: int
    quote_date: date | None
    rates: list[ExchangeRate]


class RefreshExchangeRatesUseCase:
    """Fetch anchor quotes, derive every pair and store them."""

    def __init__(
        self,
        fx_provider: FxProviderPort,
        rate_store: ExchangeRateStorePort,
        logger=None,
        currencies: tuple[str, ...] | None = None,
        anchor_currency: str = ANCHOR_CURRENCY,
    ) -> None:
        self._fx_provider = fx_provider
        self._rate_store = rate_store
        self._logger = logger or get_app_logger()
        self._currencies = tuple(currencies or SUPPORTED_CURRENCIES)
        self._anchor_currency = anchor_currency

    def run(self, now: datetime | None = None) -> RefreshExchangeRatesResult:
        """Execute the refresh.

        Args:
            now: Timestamp stamped on every stored rate; defaults to UTC now.

        Returns:
            RefreshExchangeRatesResult: Stored pairs and the quote date.

        Raises:
            DataSourceUnavailable: When the provider or store fails.
        """
        symbols = [
            code for code in self._currencies if code != self._anchor_currency
        ]
        self._logger.info(
            f"Fetching {self._anchor_currency} quotes for {','.join(symbols)}"
        )
        quote = self._fx_provider.fetch_latest(self._anchor_currency, symbols)
        missing = [code for code in symbols if code not in quote.rates]
        if missing:
            self._logger.warning(
                f"Provider returned no quote for {','.join(missing)}"
            )

        rates = build_cross_rates(
            quote.rates,
            self._currencies,
            anchor_currency=self._anchor_currency,
            updated_at=now or datetime.now(timezone.utc),
        )
        stored = self._rate_store.upsert_rates(rates)
        self._logger.info(
            f"Stored {stored} exchange rate pairs (quote date "
            f"{quote.quote_date})"
        )
        return RefreshExchangeRatesResult(
            pair_count=stored,
            quote_date=quote.quote_date,
            rates=rates,
        )


class StoreBackedExchangeRateSource:
    """ExchangeRateSourcePort reading a store and refreshing via the job."""

    def __init__(
        self,
        rate_store: ExchangeRateStorePort,
        refresh_job: RefreshExchangeRatesUseCase,
    ) -> None:
        self._rate_store = rate_store
        self._refresh_job = refresh_job

    def fetch_rates(self) -> list[ExchangeRate]:
        return self._rate_store.fetch_rates()

    def refresh_rates(self) -> None:
        self._refresh_job.run()


__all__ = [
    "ANCHOR_CURRENCY",
    "RefreshExchangeRatesResult",
    "RefreshExchangeRatesUseCase",
    "StoreBackedExchangeRateSource",
]
