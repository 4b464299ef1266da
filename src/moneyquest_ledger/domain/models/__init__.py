"""Domain models package."""

from .currency import SUPPORTED_CURRENCIES, CurrencyFormat, ExchangeRate
from .finance import (
    AggregationResult,
    CashflowPoint,
    CategoryChange,
    CategoryTotal,
    PeriodComparison,
    WalletBalances,
)
from .goals import (
    BudgetStatus,
    CategoryGoal,
    GoalPerformance,
    MonthlyGoalsReport,
)
from .ledger import Period, ReportFilters, Transaction, Wallet

__all__ = [
    "SUPPORTED_CURRENCIES",
    "CurrencyFormat",
    "ExchangeRate",
    "AggregationResult",
    "CashflowPoint",
    "CategoryChange",
    "CategoryTotal",
    "PeriodComparison",
    "WalletBalances",
    "BudgetStatus",
    "CategoryGoal",
    "GoalPerformance",
    "MonthlyGoalsReport",
    "Period",
    "ReportFilters",
    "Transaction",
    "Wallet",
]
