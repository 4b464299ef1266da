"""Composition root for wiring infrastructure adapters."""

from moneyquest_ledger.application.ports.database import DatabaseEnginePort
from moneyquest_ledger.application.ports.exchange_rates import (
    ExchangeRateStorePort,
    FxProviderPort,
)
from moneyquest_ledger.application.ports.goal_store import GoalStorePort
from moneyquest_ledger.application.ports.profile_source import (
    ProfileSourcePort,
)
from moneyquest_ledger.application.ports.transaction_source import (
    TransactionSourcePort,
)
from moneyquest_ledger.application.ports.wallet_source import WalletSourcePort
from moneyquest_ledger.application.use_cases.currency_context import (
    UserCurrencyContext,
)
from moneyquest_ledger.application.use_cases.exchange_rates import (
    ExchangeRateService,
)
from moneyquest_ledger.application.use_cases.refresh_exchange_rates import (
    RefreshExchangeRatesUseCase,
    StoreBackedExchangeRateSource,
)
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from moneyquest_ledger.infrastructure.exchange_rates_repository import (
    SqlAlchemyExchangeRateStore,
)
from moneyquest_ledger.infrastructure.frankfurter_client import (
    FrankfurterClient,
)
from moneyquest_ledger.infrastructure.goals_repository import (
    SqlAlchemyGoalRepository,
)
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger
from moneyquest_ledger.infrastructure.profiles_repository import (
    SqlAlchemyProfileRepository,
)
from moneyquest_ledger.infrastructure.settings import LedgerSettings
from moneyquest_ledger.infrastructure.transactions_repository import (
    SqlAlchemyTransactionRepository,
)
from moneyquest_ledger.infrastructure.wallets_repository import (
    SqlAlchemyWalletRepository,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_transaction_source(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> TransactionSourcePort:
    """Return the configured transaction repository."""
    resolved_settings = settings or LedgerSettings.from_env()
    return SqlAlchemyTransactionRepository(
        db_port or build_database_adapter(),
        default_currency=resolved_settings.base_currency,
    )


def build_wallet_source(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> WalletSourcePort:
    """Return the configured wallet repository."""
    resolved_settings = settings or LedgerSettings.from_env()
    return SqlAlchemyWalletRepository(
        db_port or build_database_adapter(),
        default_currency=resolved_settings.base_currency,
    )


def build_goal_store(
    db_port: DatabaseEnginePort | None = None,
) -> GoalStorePort:
    return SqlAlchemyGoalRepository(db_port or build_database_adapter())


def build_profile_source(
    db_port: DatabaseEnginePort | None = None,
) -> ProfileSourcePort:
    return SqlAlchemyProfileRepository(db_port or build_database_adapter())


def build_rate_store(
    db_port: DatabaseEnginePort | None = None,
) -> ExchangeRateStorePort:
    return SqlAlchemyExchangeRateStore(db_port or build_database_adapter())


def build_fx_provider(
    settings: LedgerSettings | None = None,
) -> FxProviderPort:
    """Return the Frankfurter client configured from settings."""
    resolved_settings = settings or LedgerSettings.from_env()
    return FrankfurterClient(
        base_url=resolved_settings.fx_api_url,
        timeout=resolved_settings.fx_timeout_seconds,
    )


def build_refresh_job(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> RefreshExchangeRatesUseCase:
    """Return the job recomputing stored rates from the provider."""
    resolved_settings = settings or LedgerSettings.from_env()
    return RefreshExchangeRatesUseCase(
        fx_provider=build_fx_provider(resolved_settings),
        rate_store=build_rate_store(db_port),
        logger=get_app_logger(),
    )


def build_exchange_rate_service(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> ExchangeRateService:
    """Return a rate service holding a fresh session RateTable."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved_db = db_port or build_database_adapter()
    rate_table = RateTable(
        stale_after_hours=resolved_settings.rates_stale_hours,
        logger=get_app_logger().logger,
    )
    rate_source = StoreBackedExchangeRateSource(
        build_rate_store(resolved_db),
        build_refresh_job(resolved_db, resolved_settings),
    )
    return ExchangeRateService(
        rate_source,
        rate_table=rate_table,
        logger=get_app_logger(),
    )


def build_currency_context(
    user_id: str,
    rate_table: RateTable,
    db_port: DatabaseEnginePort | None = None,
) -> UserCurrencyContext:
    """Return the user's currency context, falling back to BRL."""
    return UserCurrencyContext.load(
        build_profile_source(db_port),
        user_id,
        rate_table=rate_table,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_transaction_source",
    "build_wallet_source",
    "build_goal_store",
    "build_profile_source",
    "build_rate_store",
    "build_fx_provider",
    "build_refresh_job",
    "build_exchange_rate_service",
    "build_currency_context",
]
