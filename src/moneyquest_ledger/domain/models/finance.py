"""Domain models for aggregated ledger views."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for one category."""

    category: str
    total: Decimal
    percentage: Decimal
    count: int

    @property
    def average_ticket(self) -> Decimal:
        """Return the mean expense per transaction."""
        if self.count == 0:
            return Decimal("0")
        return self.total / self.count


@dataclass(frozen=True)
class AggregationResult:
    """Totals for a period, expressed in a single display currency.

    Attributes:
        total_income: Sum of converted income.
        total_expenses: Sum of converted expenses.
        net_result: Income minus expenses.
        by_category: Expense categories sorted by total, descending.
        period_start: First day of the period.
        period_end: Last day of the period.
        currency_code: Display currency of every amount.
        transaction_count: Transactions that fell inside the period.
    """

    total_income: Decimal
    total_expenses: Decimal
    net_result: Decimal
    by_category: list[CategoryTotal]
    period_start: date | None
    period_end: date | None
    currency_code: str
    transaction_count: int = 0

    @property
    def days_in_period(self) -> int:
        if self.period_start is None or self.period_end is None:
            return 0
        return (self.period_end - self.period_start).days + 1

    @property
    def daily_avg_expense(self) -> Decimal:
        days = self.days_in_period
        if days <= 0:
            return Decimal("0")
        return self.total_expenses / days

    def top_categories(self, limit: int = 5) -> list[CategoryTotal]:
        """Return the `limit` largest expense categories."""
        return self.by_category[:limit]


@dataclass(frozen=True)
class CategoryChange:
    """Category total in two periods and its percent change."""

    category: str
    current_total: Decimal
    previous_total: Decimal
    change: Decimal


@dataclass(frozen=True)
class PeriodComparison:
    """Current period against the immediately preceding one."""

    current: AggregationResult
    previous: AggregationResult
    income_change: Decimal
    expense_change: Decimal
    result_change: Decimal
    top_categories: list[CategoryChange] = field(default_factory=list)


@dataclass(frozen=True)
class CashflowPoint:
    """Income and expenses for one bucket of a cash-flow timeline."""

    period_start: date
    period_end: date
    label: str
    income: Decimal
    expenses: Decimal
    net_flow: Decimal
    cumulative_balance: Decimal


@dataclass(frozen=True)
class WalletBalances:
    """Active wallet balances per currency and converted grand total."""

    by_currency: dict[str, Decimal]
    total: Decimal
    currency_code: str


__all__ = [
    "CategoryTotal",
    "AggregationResult",
    "CategoryChange",
    "PeriodComparison",
    "CashflowPoint",
    "WalletBalances",
]
