"""Domain models for ledger records read from the data platform."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Transaction:
    """Normalized income or expense record.

    Amounts are never negative; `type` carries the direction.
    """

    id: str
    amount: Decimal
    currency: str
    type: str
    category: str
    date: date | None
    wallet_id: str | None = None
    description: str = ""
    subtype: str | None = None
    credit_card_id: str | None = None


@dataclass(frozen=True)
class Wallet:
    """Account holding a balance in its own currency."""

    id: str
    name: str
    currency: str
    current_balance: Decimal
    is_active: bool = True


@dataclass(frozen=True)
class Period:
    """Inclusive calendar-date range."""

    start: date
    end: date

    @property
    def days(self) -> int:
        """Return the number of calendar days covered."""
        return (self.end - self.start).days + 1

    def contains(self, value: date | None) -> bool:
        """Return True when the date falls inside the range."""
        if value is None:
            return False
        return self.start <= value <= self.end


@dataclass(frozen=True)
class ReportFilters:
    """Optional narrowing applied before aggregation.

    Attributes:
        transaction_type: INCOME, EXPENSE, or None for both.
        wallet_ids: Keep only these wallets (empty keeps all).
        categories: Keep only these categories (empty keeps all).
        search_text: Case-insensitive match on description or category.
        min_amount: Lower bound on the raw amount.
        max_amount: Upper bound on the raw amount.
        include_transfers: Keep transfer and card payment movements.
        include_adjustments: Keep cash adjustments.
        include_future: Keep transactions dated after today.
    """

    transaction_type: str | None = None
    wallet_ids: tuple[str, ...] = field(default_factory=tuple)
    categories: tuple[str, ...] = field(default_factory=tuple)
    search_text: str = ""
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    include_transfers: bool = False
    include_adjustments: bool = True
    include_future: bool = False


__all__ = ["Transaction", "Wallet", "Period", "ReportFilters"]
