"""Domain package for ledger rules and core models."""

from .constants import BASE_CURRENCY, EXPENSE, INCOME
from .models import (
    SUPPORTED_CURRENCIES,
    AggregationResult,
    BudgetStatus,
    CategoryGoal,
    ExchangeRate,
    Period,
    Transaction,
    Wallet,
)
from .services import (
    RateTable,
    aggregate,
    evaluate,
    format_currency,
)

__all__ = [
    "BASE_CURRENCY",
    "EXPENSE",
    "INCOME",
    "SUPPORTED_CURRENCIES",
    "AggregationResult",
    "BudgetStatus",
    "CategoryGoal",
    "ExchangeRate",
    "Period",
    "Transaction",
    "Wallet",
    "RateTable",
    "aggregate",
    "evaluate",
    "format_currency",
]
