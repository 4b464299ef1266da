"""Tests for the rate table and currency conversion."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from moneyquest_ledger.domain.models import ExchangeRate
from moneyquest_ledger.domain.services.fx import (
    RateTable,
    build_cross_rates,
    convert_amount,
    identity_rate_table,
)

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def _rate(base, target, value, updated_at=NOW) -> ExchangeRate:
    return ExchangeRate(
        base_currency=base,
        target_currency=target,
        rate=Decimal(value),
        updated_at=updated_at,
    )


@pytest.mark.parametrize("currency", ["BRL", "USD", "EUR", "JPY"])
def test_identity_conversion_returns_amount_exactly(currency) -> None:
    """Same-currency conversion should never round."""
    table = RateTable([_rate("USD", "BRL", "5.0")])
    amount = Decimal("123.456")

    assert table.convert(amount, currency, currency) == amount
    assert table.get_rate(currency, currency) == Decimal("1")


def test_missing_pair_without_fallback_uses_face_value() -> None:
    """Unknown pairs should fail open at rate 1."""
    table = RateTable()

    assert table.get_rate("BRL", "JPY") == Decimal("1")
    assert table.convert(Decimal("42.5"), "BRL", "JPY") == Decimal("42.5")


def test_stored_rate_wins_over_fallback() -> None:
    """A stored directional rate should be used before the static table."""
    table = RateTable([_rate("USD", "BRL", "5.0")])

    assert table.convert(Decimal("10"), "USD", "BRL") == Decimal("50.00")


def test_fallback_rates_used_when_pair_missing() -> None:
    """The static table should cover pairs missing from storage."""
    logger = MagicMock()
    table = RateTable(logger=logger)

    assert table.convert(Decimal("100"), "BRL", "USD") == Decimal("17.00")
    logger.debug.assert_called()


def test_rates_are_directional() -> None:
    """The inverse of a stored rate should not be derived."""
    table = RateTable([_rate("USD", "BRL", "5.0")], fallback_rates={})

    assert table.get_rate("BRL", "USD") == Decimal("1")


def test_convert_rounds_half_up_to_cents() -> None:
    table = RateTable([_rate("USD", "BRL", "0.125")])

    assert table.convert(Decimal("1"), "USD", "BRL") == Decimal("0.13")


def test_convert_normalizes_codes_and_bad_amounts() -> None:
    table = RateTable([_rate("USD", "BRL", "5")])

    assert table.convert("2", " usd ", "brl") == Decimal("10.00")
    assert table.convert("not-a-number", "USD", "BRL") == Decimal("0.00")


def test_convert_rounds_amounts_beyond_default_precision() -> None:
    table = RateTable([_rate("USD", "BRL", "5")])

    converted = table.convert(Decimal("1e30"), "USD", "BRL")

    assert converted == Decimal("5e30")
    assert converted.as_tuple().exponent == -2


def test_is_stale_without_rates() -> None:
    assert RateTable().is_stale(now=NOW) is True


def test_is_stale_after_threshold() -> None:
    """Rates older than 48 hours are stale but still used."""
    old = NOW - timedelta(hours=49)
    table = RateTable([_rate("USD", "BRL", "5.0", updated_at=old)])

    assert table.is_stale(now=NOW) is True
    assert table.convert(Decimal("1"), "USD", "BRL") == Decimal("5.00")


def test_is_not_stale_within_threshold() -> None:
    recent = NOW - timedelta(hours=47)
    table = RateTable([_rate("USD", "BRL", "5.0", updated_at=recent)])

    assert table.is_stale(now=NOW) is False


def test_naive_timestamps_are_read_as_utc() -> None:
    naive = datetime(2024, 3, 10, 11, 0)
    table = RateTable([_rate("USD", "BRL", "5.0", updated_at=naive)])

    assert table.last_update == naive.replace(tzinfo=timezone.utc)
    assert table.is_stale(now=NOW) is False


def test_replace_swaps_the_whole_table() -> None:
    """A refresh should drop pairs missing from the new rows."""
    table = RateTable([_rate("USD", "BRL", "5.0"), _rate("EUR", "BRL", "6")])

    count = table.replace([_rate("USD", "BRL", "5.5")])

    assert count == 1
    assert table.get_rate("USD", "BRL") == Decimal("5.5")
    assert table.get_rate("EUR", "BRL") == Decimal("6.30")


def test_replace_keeps_newest_duplicate_and_skips_invalid_rows() -> None:
    older = NOW - timedelta(hours=1)
    table = RateTable()

    count = table.replace(
        [
            _rate("USD", "BRL", "5.5"),
            _rate("USD", "BRL", "4.0", updated_at=older),
            _rate("BRL", "BRL", "2"),
            _rate("EUR", "BRL", "0"),
        ]
    )

    assert count == 1
    assert table.get_rate("USD", "BRL") == Decimal("5.5")
    assert table.last_update == NOW


def test_replace_with_no_rows_keeps_current_table() -> None:
    table = RateTable([_rate("USD", "BRL", "5.0")])
    listener = MagicMock()
    table.on_change(listener)

    assert table.replace([]) == 0
    assert table.get_rate("USD", "BRL") == Decimal("5.0")
    listener.assert_not_called()


def test_on_change_notifies_until_unsubscribed() -> None:
    table = RateTable()
    listener = MagicMock()
    unsubscribe = table.on_change(listener)

    table.replace([_rate("USD", "BRL", "5.0")])
    unsubscribe()
    unsubscribe()
    table.replace([_rate("USD", "BRL", "5.1")])

    listener.assert_called_once_with(table)


def test_convert_amount_defaults_to_fallback_table() -> None:
    assert convert_amount(Decimal("10"), "EUR", "BRL") == Decimal("63.00")


def test_identity_rate_table_converts_at_face_value() -> None:
    table = identity_rate_table()

    assert table.convert(Decimal("10"), "EUR", "BRL") == Decimal("10")


def test_build_cross_rates_derives_every_pair() -> None:
    """Cross rates divide anchor quotes and never include identity pairs."""
    rows = build_cross_rates(
        {"BRL": Decimal("6.0"), "USD": Decimal("1.2")},
        ["BRL", "USD", "EUR"],
        anchor_currency="EUR",
        updated_at=NOW,
    )
    rates = {(row.base_currency, row.target_currency): row.rate for row in rows}

    assert len(rows) == 6
    assert all(base != target for base, target in rates)
    assert rates[("USD", "BRL")] == Decimal("5.000000")
    assert rates[("BRL", "USD")] == Decimal("0.200000")
    assert rates[("BRL", "EUR")] == Decimal("0.166667")
    assert rates[("EUR", "USD")] == Decimal("1.200000")
    assert all(row.updated_at == NOW for row in rows)


def test_build_cross_rates_skips_missing_quotes() -> None:
    rows = build_cross_rates(
        {"USD": Decimal("1.1")},
        ["BRL", "USD", "EUR"],
        anchor_currency="EUR",
        updated_at=NOW,
    )
    pairs = {(row.base_currency, row.target_currency) for row in rows}

    assert ("BRL", "USD") not in pairs
    assert ("USD", "EUR") in pairs
    assert ("USD", "BRL") not in pairs
