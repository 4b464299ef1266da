"""Tests for the SQLAlchemy repositories."""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.domain.constants import EXPENSE
from moneyquest_ledger.domain.models import ExchangeRate
from moneyquest_ledger.infrastructure.exchange_rates_repository import (
    SqlAlchemyExchangeRateStore,
)
from moneyquest_ledger.infrastructure.goals_repository import (
    SqlAlchemyGoalRepository,
)
from moneyquest_ledger.infrastructure.profiles_repository import (
    SqlAlchemyProfileRepository,
)
from moneyquest_ledger.infrastructure.transactions_repository import (
    SqlAlchemyTransactionRepository,
)
from moneyquest_ledger.infrastructure.wallets_repository import (
    SqlAlchemyWalletRepository,
)


def _build_db_port() -> tuple[MagicMock, MagicMock]:
    engine = MagicMock()
    conn = MagicMock()
    context = MagicMock()
    context.__enter__.return_value = conn
    engine.connect.return_value = context
    engine.begin.return_value = context

    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    return db_port, conn


def _failing_db_port() -> MagicMock:
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value.connect.side_effect = (
        OperationalError("SELECT", {}, Exception("refused"))
    )
    db_port.get_ledger_engine.return_value.begin.side_effect = (
        OperationalError("UPDATE", {}, Exception("refused"))
    )
    return db_port


def test_transactions_are_normalized_and_bounded() -> None:
    db_port, conn = _build_db_port()
    conn.execute.return_value.mappings.return_value.all.return_value = [
        {
            "id": "t1",
            "amount": Decimal("-12.50"),
            "currency": None,
            "type": "expense",
            "category": "Food",
            "date": "2024-03-02",
            "wallet_id": "w1",
            "description": "Lunch",
            "transaction_subtype": None,
            "credit_card_id": None,
        }
    ]
    repo = SqlAlchemyTransactionRepository(db_port, default_currency="USD")

    rows = repo.fetch_transactions(
        "u1",
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 31),
    )

    query, params = conn.execute.call_args.args
    assert "date >= :start_date" in str(query)
    assert "date <= :end_date" in str(query)
    assert params == {
        "user_id": "u1",
        "start_date": date(2024, 3, 1),
        "end_date": date(2024, 3, 31),
    }
    (tx,) = rows
    assert tx.amount == Decimal("12.50")
    assert tx.currency == "USD"
    assert tx.type == EXPENSE
    assert tx.date == date(2024, 3, 2)


def test_transactions_without_bounds_filter_only_user() -> None:
    db_port, conn = _build_db_port()
    conn.execute.return_value.mappings.return_value.all.return_value = []

    assert SqlAlchemyTransactionRepository(db_port).fetch_transactions("u1") == []
    query, params = conn.execute.call_args.args
    assert ":start_date" not in str(query)
    assert params == {"user_id": "u1"}


@pytest.mark.parametrize(
    "call",
    [
        lambda port: SqlAlchemyTransactionRepository(port).fetch_transactions(
            "u"
        ),
        lambda port: SqlAlchemyWalletRepository(port).fetch_wallets("u"),
        lambda port: SqlAlchemyGoalRepository(port).fetch_goals("u"),
        lambda port: SqlAlchemyExchangeRateStore(port).fetch_rates(),
        lambda port: SqlAlchemyProfileRepository(port).get_preferred_currency(
            "u"
        ),
        lambda port: SqlAlchemyProfileRepository(port).set_preferred_currency(
            "u",
            "USD",
        ),
    ],
)
def test_sql_errors_become_data_source_unavailable(call) -> None:
    with pytest.raises(DataSourceUnavailable):
        call(_failing_db_port())


def test_exchange_rates_are_read_as_decimals() -> None:
    db_port, conn = _build_db_port()
    stamp = datetime(2024, 3, 1, tzinfo=timezone.utc)
    conn.execute.return_value.all.return_value = [
        SimpleNamespace(
            base_currency="usd",
            target_currency="BRL",
            rate=5.1,
            updated_at=stamp,
        )
    ]

    rates = SqlAlchemyExchangeRateStore(db_port).fetch_rates()

    assert rates == [
        ExchangeRate(
            base_currency="USD",
            target_currency="BRL",
            rate=Decimal("5.1"),
            updated_at=stamp,
        )
    ]


def test_upsert_rates_writes_in_one_transaction() -> None:
    db_port, conn = _build_db_port()
    store = SqlAlchemyExchangeRateStore(db_port)
    rates = [
        ExchangeRate("USD", "BRL", Decimal("5.1")),
        ExchangeRate("BRL", "USD", Decimal("0.19")),
    ]

    assert store.upsert_rates(rates) == 2
    statement, payload = conn.execute.call_args.args
    assert "ON CONFLICT (base_currency, target_currency)" in str(statement)
    assert payload[0]["base_currency"] == "USD"
    assert payload[1]["rate"] == Decimal("0.19")
    db_port.get_ledger_engine.return_value.begin.assert_called_once()


def test_upsert_without_rates_skips_database() -> None:
    db_port, _ = _build_db_port()

    assert SqlAlchemyExchangeRateStore(db_port).upsert_rates([]) == 0
    db_port.get_ledger_engine.assert_not_called()


def test_profile_currency_read_and_write() -> None:
    db_port, conn = _build_db_port()
    conn.execute.return_value.scalar.return_value = "EUR"
    repo = SqlAlchemyProfileRepository(db_port)

    assert repo.get_preferred_currency("u1") == "EUR"
    repo.set_preferred_currency("u1", "USD")

    _, params = conn.execute.call_args.args
    assert params == {"currency": "USD", "user_id": "u1"}


def test_goals_are_mapped() -> None:
    db_port, conn = _build_db_port()
    conn.execute.return_value.all.return_value = [
        SimpleNamespace(
            id=3,
            category="Food",
            budget_limit="500.00",
            created_at=None,
        )
    ]

    (goal,) = SqlAlchemyGoalRepository(db_port).fetch_goals("u1")

    assert goal.id == "3"
    assert goal.budget_limit == Decimal("500.00")
    assert goal.period == "monthly"


def test_wallets_are_normalized() -> None:
    db_port, conn = _build_db_port()
    conn.execute.return_value.mappings.return_value.all.return_value = [
        {
            "id": "w1",
            "name": "Conta",
            "currency": "",
            "current_balance": "10.5",
            "is_active": False,
        }
    ]

    (wallet,) = SqlAlchemyWalletRepository(db_port).fetch_wallets("u1")

    assert wallet.currency == "BRL"
    assert wallet.current_balance == Decimal("10.5")
    assert wallet.is_active is False
