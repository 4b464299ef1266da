"""SQLAlchemy-backed repository for user transactions."""

from datetime import date

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.database import DatabaseEnginePort
from moneyquest_ledger.application.ports.transaction_source import (
    TransactionSourcePort,
)
from moneyquest_ledger.domain.constants import BASE_CURRENCY
from moneyquest_ledger.domain.models import Transaction
from moneyquest_ledger.domain.services.normalization import (
    normalize_transaction,
)


class SqlAlchemyTransactionRepository(TransactionSourcePort):
    """Read transactions from the application database."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        default_currency: str = BASE_CURRENCY,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            default_currency: Currency assumed for rows without one.
        """
        self._db_port = db_port
        self._default_currency = default_currency

    def fetch_transactions(
        self,
        user_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        """Return the user's transactions, optionally bounded by date.

        Raises:
            DataSourceUnavailable: When the query fails.
        """
        clauses = ["user_id = :user_id"]
        params: dict[str, object] = {"user_id": user_id}
        if start_date is not None:
            clauses.append("date >= :start_date")
            params["start_date"] = start_date
        if end_date is not None:
            clauses.append("date <= :end_date")
            params["end_date"] = end_date
        query = text(
            f"""
            SELECT id, amount, currency, type, category, date, wallet_id,
                   description, transaction_subtype, credit_card_id
            FROM transactions
            WHERE {" AND ".join(clauses)}
            ORDER BY date DESC
            """
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                rows = conn.execute(query, params).mappings().all()
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(
                f"Could not fetch transactions: {exc}"
            ) from exc
        return [
            normalize_transaction(row, self._default_currency) for row in rows
        ]


__all__ = ["SqlAlchemyTransactionRepository"]
