"""Use case to compute wallet balances per currency."""

from dataclasses import dataclass

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.wallet_source import WalletSourcePort
from moneyquest_ledger.domain.models import WalletBalances
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.domain.services.ledger import ZERO, wallet_balances
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class WalletBalancesView:
    balances: WalletBalances
    error: str | None = None


class GetWalletBalancesUseCase:
    """Group active wallets by currency with a converted total."""

    def __init__(
        self,
        wallet_source: WalletSourcePort,
        rate_table: RateTable,
        logger=None,
    ) -> None:
        self._wallet_source = wallet_source
        self._rate_table = rate_table
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, target_currency: str) -> WalletBalancesView:
        try:
            wallets = self._wallet_source.fetch_wallets(user_id)
        except DataSourceUnavailable as exc:
            self._logger.error(f"Error fetching wallets: {exc}")
            return WalletBalancesView(
                balances=WalletBalances(
                    by_currency={},
                    total=ZERO,
                    currency_code=target_currency,
                ),
                error=str(exc),
            )
        self._logger.info(f"Fetched {len(wallets)} wallets for {user_id}")
        return WalletBalancesView(
            balances=wallet_balances(
                wallets,
                rate_table=self._rate_table,
                target_currency=target_currency,
            )
        )


__all__ = ["GetWalletBalancesUseCase", "WalletBalancesView"]
