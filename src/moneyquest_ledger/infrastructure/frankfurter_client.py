"""HTTP client for the Frankfurter exchange rate API (ECB reference rates)."""

from datetime import date
from decimal import Decimal

import httpx

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.exchange_rates import (
    FxProviderPort,
    FxQuote,
)
from moneyquest_ledger.domain.services.normalization import normalize_currency
from moneyquest_ledger.infrastructure.settings import (
    DEFAULT_FX_API_URL,
    DEFAULT_FX_TIMEOUT_SECONDS,
)
from moneyquest_ledger.utils.decimal_utils import coerce_decimal


class FrankfurterClient(FxProviderPort):
    """Fetch the latest rates quoted against a base currency."""

    def __init__(
        self,
        base_url: str = DEFAULT_FX_API_URL,
        timeout: float = DEFAULT_FX_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. https://api.frankfurter.dev/v1.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def fetch_latest(self, base_currency: str, symbols: list[str]) -> FxQuote:
        """Return units of each symbol per one `base_currency`.

        Raises:
            DataSourceUnavailable: On transport errors, non-200 responses or
                malformed payloads.
        """
        params = {"base": normalize_currency(base_currency)}
        if symbols:
            params["symbols"] = ",".join(
                normalize_currency(code) for code in symbols
            )
        with httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = client.get("/latest", params=params)
            except httpx.HTTPError as exc:
                raise DataSourceUnavailable(
                    f"HTTP error fetching exchange rates: {exc}"
                ) from exc

        if response.status_code != 200:
            raise DataSourceUnavailable(
                f"Rate API returned status {response.status_code}: "
                f"{response.text}"
            )
        try:
            payload = response.json(parse_float=Decimal)
        except ValueError as exc:
            raise DataSourceUnavailable(
                f"Invalid JSON from rate API: {exc}"
            ) from exc

        raw_rates = None
        if isinstance(payload, dict):
            raw_rates = payload.get("rates")
        if not isinstance(raw_rates, dict):
            raise DataSourceUnavailable("Rate API response has no rates")
        rates = {
            normalize_currency(code): coerce_decimal(value)
            for code, value in raw_rates.items()
        }
        return FxQuote(
            base_currency=normalize_currency(
                payload.get("base"),
                params["base"],
            ),
            rates={code: rate for code, rate in rates.items() if rate > 0},
            quote_date=_parse_date(payload.get("date")),
        )


def _parse_date(value) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


__all__ = ["FrankfurterClient"]
