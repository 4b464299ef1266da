"""Application use cases package."""

from .currency_context import UserCurrencyContext, default_currency_context
from .exchange_rates import ExchangeRateService, RatesState
from .get_category_goals import CategoryGoalsView, GetCategoryGoalsUseCase
from .get_monthly_goals_report import (
    GetMonthlyGoalsReportUseCase,
    MonthlyGoalsView,
)
from .get_period_report import GetPeriodReportUseCase, PeriodReport
from .get_wallet_balances import GetWalletBalancesUseCase, WalletBalancesView
from .refresh_exchange_rates import (
    RefreshExchangeRatesResult,
    RefreshExchangeRatesUseCase,
    StoreBackedExchangeRateSource,
)

__all__ = [
    "UserCurrencyContext",
    "default_currency_context",
    "ExchangeRateService",
    "RatesState",
    "CategoryGoalsView",
    "GetCategoryGoalsUseCase",
    "GetMonthlyGoalsReportUseCase",
    "MonthlyGoalsView",
    "GetPeriodReportUseCase",
    "PeriodReport",
    "GetWalletBalancesUseCase",
    "WalletBalancesView",
    "RefreshExchangeRatesResult",
    "RefreshExchangeRatesUseCase",
    "StoreBackedExchangeRateSource",
]
