"""Database port for the ledger services.

Infrastructure implementations provide the concrete SQLAlchemy engine; use
cases and repositories depend on this protocol only.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the application database engine."""

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the application database.

        Returns:
            Engine: SQLAlchemy engine holding transactions, goals and rates.
        """


__all__ = ["DatabaseEnginePort"]
