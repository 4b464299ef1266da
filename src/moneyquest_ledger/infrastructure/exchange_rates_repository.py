"""SQLAlchemy-backed store for exchange rates."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.database import DatabaseEnginePort
from moneyquest_ledger.application.ports.exchange_rates import (
    ExchangeRateStorePort,
)
from moneyquest_ledger.domain.models import ExchangeRate
from moneyquest_ledger.domain.services.normalization import normalize_currency
from moneyquest_ledger.utils.decimal_utils import coerce_decimal


class SqlAlchemyExchangeRateStore(ExchangeRateStorePort):
    """Read and upsert rows of the exchange_rates table.

    Rows are unique on (base_currency, target_currency).
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def fetch_rates(self) -> list[ExchangeRate]:
        """Return every stored rate.

        Raises:
            DataSourceUnavailable: When the query fails.
        """
        query = text(
            """
            SELECT base_currency, target_currency, rate, updated_at
            FROM exchange_rates
            """
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                rows = conn.execute(query).all()
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(
                f"Could not fetch exchange rates: {exc}"
            ) from exc
        return [
            ExchangeRate(
                base_currency=normalize_currency(row.base_currency),
                target_currency=normalize_currency(row.target_currency),
                rate=coerce_decimal(row.rate),
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    def upsert_rates(self, rates: list[ExchangeRate]) -> int:
        """Insert or update rates in one transaction.

        Returns:
            int: Number of rows written.

        Raises:
            DataSourceUnavailable: When the statement fails.
        """
        if not rates:
            return 0
        statement = text(
            """
            INSERT INTO exchange_rates (
                base_currency,
                target_currency,
                rate,
                updated_at
            )
            VALUES (:base_currency, :target_currency, :rate, :updated_at)
            ON CONFLICT (base_currency, target_currency) DO UPDATE SET
                rate = EXCLUDED.rate,
                updated_at = EXCLUDED.updated_at
            """
        )
        payload = [
            {
                "base_currency": rate.base_currency,
                "target_currency": rate.target_currency,
                "rate": rate.rate,
                "updated_at": rate.updated_at,
            }
            for rate in rates
        ]
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.execute(statement, payload)
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(
                f"Could not store exchange rates: {exc}"
            ) from exc
        return len(payload)


__all__ = ["SqlAlchemyExchangeRateStore"]
