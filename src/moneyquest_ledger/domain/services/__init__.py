"""Domain services package."""

from .budget import (
    build_goal_performances,
    build_monthly_goals_report,
    classify_spend,
    evaluate,
    near_limit,
    spent_by_category,
)
from .formatting import format_currency, format_percent
from .fx import (
    RateTable,
    build_cross_rates,
    convert_amount,
    identity_rate_table,
)
from .ledger import (
    aggregate,
    cashflow_timeline,
    compare_periods,
    filter_transactions,
    percent_change,
    wallet_balances,
)
from .normalization import (
    normalize_currency,
    normalize_transaction,
    normalize_wallet,
    parse_calendar_date,
)

__all__ = [
    "build_goal_performances",
    "build_monthly_goals_report",
    "classify_spend",
    "evaluate",
    "near_limit",
    "spent_by_category",
    "format_currency",
    "format_percent",
    "RateTable",
    "build_cross_rates",
    "convert_amount",
    "identity_rate_table",
    "aggregate",
    "cashflow_timeline",
    "compare_periods",
    "filter_transactions",
    "percent_change",
    "wallet_balances",
    "normalize_currency",
    "normalize_transaction",
    "normalize_wallet",
    "parse_calendar_date",
]
