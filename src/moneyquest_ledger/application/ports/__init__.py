"""Application ports package."""

from .database import DatabaseEnginePort
from .exchange_rates import (
    ExchangeRateSourcePort,
    ExchangeRateStorePort,
    FxProviderPort,
    FxQuote,
)
from .goal_store import GoalStorePort
from .profile_source import ProfileSourcePort
from .transaction_source import TransactionSourcePort
from .wallet_source import WalletSourcePort

__all__ = [
    "DatabaseEnginePort",
    "ExchangeRateSourcePort",
    "ExchangeRateStorePort",
    "FxProviderPort",
    "FxQuote",
    "GoalStorePort",
    "ProfileSourcePort",
    "TransactionSourcePort",
    "WalletSourcePort",
]
