"""Port for reading wallets."""

from typing import Protocol

from moneyquest_ledger.domain.models import Wallet


class WalletSourcePort(Protocol):
    """Read-only access to a user's wallets."""

    def fetch_wallets(self, user_id: str) -> list[Wallet]:
        """Return wallets with their current balances."""


__all__ = ["WalletSourcePort"]
