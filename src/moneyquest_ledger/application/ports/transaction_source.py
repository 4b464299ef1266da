"""Port for reading transactions."""

from datetime import date
from typing import Protocol

from moneyquest_ledger.domain.models import Transaction


class TransactionSourcePort(Protocol):
    """Read-only access to a user's transactions."""

    def fetch_transactions(
        self,
        user_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        """Return normalized transactions, optionally bounded by date."""


__all__ = ["TransactionSourcePort"]
