"""SQLAlchemy-backed access to the user's display currency preference."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.database import DatabaseEnginePort
from moneyquest_ledger.application.ports.profile_source import (
    ProfileSourcePort,
)


class SqlAlchemyProfileRepository(ProfileSourcePort):
    """Read and write `profiles.currency`."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def get_preferred_currency(self, user_id: str) -> str | None:
        """Return the stored currency, or None when the profile has none."""
        query = text("SELECT currency FROM profiles WHERE id = :user_id")
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                value = conn.execute(query, {"user_id": user_id}).scalar()
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(
                f"Could not read profile {user_id}: {exc}"
            ) from exc
        return value or None

    def set_preferred_currency(self, user_id: str, currency: str) -> None:
        statement = text(
            "UPDATE profiles SET currency = :currency WHERE id = :user_id"
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.execute(
                    statement,
                    {"currency": currency, "user_id": user_id},
                )
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(
                f"Could not update profile {user_id}: {exc}"
            ) from exc


__all__ = ["SqlAlchemyProfileRepository"]
