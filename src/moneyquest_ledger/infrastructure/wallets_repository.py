"""SQLAlchemy-backed repository for wallets."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.database import DatabaseEnginePort
from moneyquest_ledger.application.ports.wallet_source import WalletSourcePort
from moneyquest_ledger.domain.constants import BASE_CURRENCY
from moneyquest_ledger.domain.models import Wallet
from moneyquest_ledger.domain.services.normalization import normalize_wallet


class SqlAlchemyWalletRepository(WalletSourcePort):
    """Repository reading the wallets table."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        default_currency: str = BASE_CURRENCY,
    ) -> None:
        self._db_port = db_port
        self._default_currency = default_currency

    def fetch_wallets(self, user_id: str) -> list[Wallet]:
        """Return the user's wallets in display order.

        Raises:
            DataSourceUnavailable: When the query fails.
        """
        query = text(
            """
            SELECT id, name, currency, current_balance, is_active
            FROM wallets
            WHERE user_id = :user_id
            ORDER BY display_order, name
            """
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                result = conn.execute(query, {"user_id": user_id})
                rows = result.mappings().all()
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(
                f"Could not fetch wallets: {exc}"
            ) from exc
        return [normalize_wallet(row, self._default_currency) for row in rows]


__all__ = ["SqlAlchemyWalletRepository"]
