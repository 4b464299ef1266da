"""Use case owning the session rate table and its refreshes."""

from dataclasses import dataclass
from datetime import datetime
import threading

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.exchange_rates import (
    ExchangeRateSourcePort,
)
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class RatesState:
    """Snapshot of the rate table for presentation layers.

    Attributes:
        pair_count: Directional pairs currently held.
        last_update: Timestamp of the newest rate, if any.
        is_stale: True when the newest rate is older than the threshold.
        error: Message of the last failed fetch or refresh.
    """

    pair_count: int
    last_update: datetime | None
    is_stale: bool
    error: str | None = None


class ExchangeRateService:
    """Load and refresh the session's RateTable.

    Concurrent `refresh_rates` calls share one in-flight refresh: callers
    arriving while it runs wait for it and receive the same state.
    """

    def __init__(
        self,
        rate_source: ExchangeRateSourcePort,
        rate_table: RateTable | None = None,
        logger=None,
    ) -> None:
        """Initialize the service.

        Args:
            rate_source: Port reading and recomputing stored rates.
            rate_table: Table to fill; a new one is created when omitted.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._rate_source = rate_source
        self._rate_table = rate_table or RateTable()
        self._logger = logger or get_app_logger()
        self._error: str | None = None
        self._lock = threading.Lock()
        self._inflight: _InflightRefresh | None = None

    @property
    def rate_table(self) -> RateTable:
        return self._rate_table

    def state(self) -> RatesState:
        """Return the current table snapshot."""
        return RatesState(
            pair_count=len(self._rate_table.rates),
            last_update=self._rate_table.last_update,
            is_stale=self._rate_table.is_stale(),
            error=self._error,
        )

    def load_rates(self) -> RatesState:
        """Fetch stored rates and replace the table.

        Fetch failures keep the previous table and are reported through
        `RatesState.error`.
        """
        try:
            rates = self._rate_source.fetch_rates()
        except DataSourceUnavailable as exc:
            self._error = str(exc)
            self._logger.error(f"Error fetching exchange rates: {exc}")
            return self.state()

        self._error = None
        pair_count = self._rate_table.replace(rates)
        self._logger.info(f"Loaded {pair_count} exchange rate pairs")
        if self._rate_table.is_stale():
            self._logger.warning(
                "Exchange rates are stale; last update="
                f"{self._rate_table.last_update}"
            )
        return self.state()

    def refresh_rates(self) -> RatesState:
        """Recompute rates in the backend, then reload the table."""
        with self._lock:
            inflight = self._inflight
            owner = inflight is None
            if owner:
                inflight = _InflightRefresh()
                self._inflight = inflight
        if not owner:
            self._logger.debug("Joining in-flight exchange rate refresh")
            return inflight.wait()

        try:
            state = self._run_refresh()
        except BaseException as exc:
            inflight.error = exc
            raise
        else:
            inflight.state = state
            return state
        finally:
            with self._lock:
                self._inflight = None
            inflight.done.set()

    def _run_refresh(self) -> RatesState:
        try:
            self._rate_source.refresh_rates()
        except DataSourceUnavailable as exc:
            self._error = str(exc)
            self._logger.error(f"Error refreshing exchange rates: {exc}")
            return self.state()
        self._logger.info("Exchange rates refreshed")
        return self.load_rates()


class _InflightRefresh:
    """Outcome of one refresh, shared with callers that joined it."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.state: RatesState | None = None
        self.error: BaseException | None = None

    def wait(self) -> RatesState:
        self.done.wait()
        if self.error is not None:
            raise self.error
        return self.state


__all__ = ["ExchangeRateService", "RatesState"]
