"""Port for reading category goals."""

from typing import Protocol

from moneyquest_ledger.domain.models import CategoryGoal


class GoalStorePort(Protocol):
    """Read-only access to a user's category goals."""

    def fetch_goals(self, user_id: str) -> list[CategoryGoal]:
        """Return the configured goals."""


__all__ = ["GoalStorePort"]
