"""Use case evaluating category goals for the current month."""

from dataclasses import dataclass, field
from datetime import date

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.goal_store import GoalStorePort
from moneyquest_ledger.application.ports.transaction_source import (
    TransactionSourcePort,
)
from moneyquest_ledger.domain.models import GoalPerformance, Period
from moneyquest_ledger.domain.services.budget import (
    build_goal_performances,
    near_limit,
    spent_by_category,
)
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.domain.services.periods import (
    current_month,
    previous_month,
)
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class CategoryGoalsView:
    """Goal performances for one month.

    Attributes:
        period: Evaluated month.
        currency_code: Currency of every spend and limit.
        performances: One entry per goal, in store order.
        near_limit: Categories at or above 80% of their limit.
        error: Message when goals or transactions could not be fetched.
    """

    period: Period
    currency_code: str
    performances: list[GoalPerformance] = field(default_factory=list)
    near_limit: list[str] = field(default_factory=list)
    error: str | None = None


class GetCategoryGoalsUseCase:
    """Compare the month's expenses with each category goal."""

    def __init__(
        self,
        goal_store: GoalStorePort,
        transaction_source: TransactionSourcePort,
        rate_table: RateTable,
        logger=None,
    ) -> None:
        self._goal_store = goal_store
        self._transaction_source = transaction_source
        self._rate_table = rate_table
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        target_currency: str,
        period: Period | None = None,
        today: date | None = None,
    ) -> CategoryGoalsView:
        """Return goal performances for `period` (default: current month).

        Limits are read as amounts in `target_currency`; spend of older
        transactions is valued at today's rates.
        """
        period = period or current_month(today)
        previous = previous_month(period)
        try:
            goals = self._goal_store.fetch_goals(user_id)
            transactions = self._transaction_source.fetch_transactions(
                user_id,
                start_date=previous.start,
                end_date=period.end,
            )
        except DataSourceUnavailable as exc:
            self._logger.error(f"Error fetching category goals: {exc}")
            return CategoryGoalsView(
                period=period,
                currency_code=target_currency,
                error=str(exc),
            )
        self._logger.info(f"Fetched {len(goals)} category goals for {user_id}")

        current_spent = spent_by_category(
            transactions,
            period,
            rate_table=self._rate_table,
            target_currency=target_currency,
        )
        previous_spent = spent_by_category(
            transactions,
            previous,
            rate_table=self._rate_table,
            target_currency=target_currency,
        )
        performances = build_goal_performances(
            goals,
            current_spent,
            previous_spent,
        )
        flagged = [
            item.category
            for goal, item in zip(goals, performances)
            if near_limit(goal, item.spent)
        ]
        if flagged:
            self._logger.warning(
                f"Categories near their limit: {', '.join(flagged)}"
            )
        return CategoryGoalsView(
            period=period,
            currency_code=target_currency,
            performances=performances,
            near_limit=flagged,
        )


__all__ = ["CategoryGoalsView", "GetCategoryGoalsUseCase"]
