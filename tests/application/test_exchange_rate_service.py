"""Tests for the ExchangeRateService."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
import threading
from unittest.mock import MagicMock

import pytest

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.use_cases.exchange_rates import (
    ExchangeRateService,
)
from moneyquest_ledger.domain.models import ExchangeRate
from moneyquest_ledger.domain.services.fx import RateTable


def _rates(value: str = "5.0") -> list[ExchangeRate]:
    return [
        ExchangeRate(
            base_currency="USD",
            target_currency="BRL",
            rate=Decimal(value),
            updated_at=datetime.now(timezone.utc) - timedelta(hours=1),
        )
    ]


def test_load_rates_fills_table() -> None:
    """Fetched rows should replace the session table."""
    source = MagicMock()
    source.fetch_rates.return_value = _rates()
    logger = MagicMock()
    service = ExchangeRateService(source, logger=logger)

    state = service.load_rates()

    assert state.pair_count == 1
    assert state.is_stale is False
    assert state.error is None
    assert service.rate_table.get_rate("USD", "BRL") == Decimal("5.0")
    logger.info.assert_called()


def test_load_rates_failure_keeps_previous_table() -> None:
    source = MagicMock()
    source.fetch_rates.side_effect = DataSourceUnavailable("db down")
    logger = MagicMock()
    table = RateTable(_rates("4.0"))
    service = ExchangeRateService(source, rate_table=table, logger=logger)

    state = service.load_rates()

    assert state.error == "db down"
    assert state.pair_count == 1
    assert table.get_rate("USD", "BRL") == Decimal("4.0")
    logger.error.assert_called_once()


def test_refresh_rates_recomputes_then_reloads() -> None:
    source = MagicMock()
    source.fetch_rates.return_value = _rates("5.5")
    service = ExchangeRateService(source, logger=MagicMock())

    state = service.refresh_rates()

    source.refresh_rates.assert_called_once()
    assert state.pair_count == 1
    assert service.rate_table.get_rate("USD", "BRL") == Decimal("5.5")


def test_refresh_failure_is_reported_in_state() -> None:
    source = MagicMock()
    source.refresh_rates.side_effect = DataSourceUnavailable("timeout")
    service = ExchangeRateService(source, logger=MagicMock())

    state = service.refresh_rates()

    assert state.error == "timeout"
    assert state.pair_count == 0
    source.fetch_rates.assert_not_called()


def test_unexpected_refresh_error_propagates_and_resets() -> None:
    source = MagicMock()
    source.refresh_rates.side_effect = [KeyError("boom"), None]
    source.fetch_rates.return_value = _rates()
    service = ExchangeRateService(source, logger=MagicMock())

    with pytest.raises(KeyError):
        service.refresh_rates()

    assert service.refresh_rates().pair_count == 1


def test_concurrent_refreshes_share_one_backend_call() -> None:
    """A refresh requested while one is running should join it."""
    started = threading.Event()
    joined = threading.Event()
    release = threading.Event()

    source = MagicMock()
    source.fetch_rates.return_value = _rates()

    def _slow_refresh() -> None:
        started.set()
        release.wait(timeout=5)

    source.refresh_rates.side_effect = _slow_refresh
    logger = MagicMock()
    logger.debug.side_effect = lambda *args, **kwargs: joined.set()
    service = ExchangeRateService(source, logger=logger)

    results = []
    first = threading.Thread(
        target=lambda: results.append(service.refresh_rates())
    )
    second = threading.Thread(
        target=lambda: results.append(service.refresh_rates())
    )
    first.start()
    assert started.wait(timeout=5)
    second.start()
    assert joined.wait(timeout=5)
    release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert source.refresh_rates.call_count == 1
    assert len(results) == 2
    assert results[0] == results[1]


class _Aborted(BaseException):
    pass


def test_aborted_refresh_releases_joined_callers() -> None:
    """Callers joining a refresh that dies with a BaseException get it too."""
    started = threading.Event()
    joined = threading.Event()
    release = threading.Event()

    def _aborting_refresh() -> None:
        started.set()
        release.wait(timeout=5)
        raise _Aborted()

    source = MagicMock()
    source.refresh_rates.side_effect = _aborting_refresh
    logger = MagicMock()
    logger.debug.side_effect = lambda *args, **kwargs: joined.set()
    service = ExchangeRateService(source, logger=logger)

    errors = []

    def _refresh() -> None:
        try:
            service.refresh_rates()
        except _Aborted as exc:
            errors.append(exc)

    first = threading.Thread(target=_refresh)
    second = threading.Thread(target=_refresh)
    first.start()
    assert started.wait(timeout=5)
    second.start()
    assert joined.wait(timeout=5)
    release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert not second.is_alive()
    assert len(errors) == 2
    assert errors[0] is errors[1]
    assert source.refresh_rates.call_count == 1
