"""Use case summarizing goal adherence for a calendar month."""

from dataclasses import dataclass

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.goal_store import GoalStorePort
from moneyquest_ledger.application.ports.transaction_source import (
    TransactionSourcePort,
)
from moneyquest_ledger.domain.models import MonthlyGoalsReport
from moneyquest_ledger.domain.services.budget import (
    build_monthly_goals_report,
    spent_by_category,
)
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.domain.services.periods import (
    month_period,
    previous_month,
)
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class MonthlyGoalsView:
    """Monthly report wrapper; `report` is None when the user has no goals."""

    year: int
    month: int
    currency_code: str
    report: MonthlyGoalsReport | None = None
    error: str | None = None


class GetMonthlyGoalsReportUseCase:
    """Build the monthly goals report for a user."""

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
        year: int,
        month: int,
        target_currency: str,
    ) -> MonthlyGoalsView:
        """Return the report for `year`/`month` in `target_currency`.

        Args:
            user_id: Owner of goals and transactions.
            year: Report year.
            month: Report month, 1-12.
            target_currency: Display currency.

        Returns:
            MonthlyGoalsView: Report, or `error` set when a source failed.
        """
        period = month_period(year, month)
        previous = previous_month(period)
        try:
            goals = self._goal_store.fetch_goals(user_id)
            if not goals:
                self._logger.info(f"No category goals for {user_id}")
                return MonthlyGoalsView(
                    year=year,
                    month=month,
                    currency_code=target_currency,
                )
            transactions = self._transaction_source.fetch_transactions(
                user_id,
                start_date=previous.start,
                end_date=period.end,
            )
        except DataSourceUnavailable as exc:
            self._logger.error(f"Error building monthly goals report: {exc}")
            return MonthlyGoalsView(
                year=year,
                month=month,
                currency_code=target_currency,
                error=str(exc),
            )

        report = build_monthly_goals_report(
            goals,
            spent_by_category(
                transactions,
                period,
                rate_table=self._rate_table,
                target_currency=target_currency,
            ),
            spent_by_category(
                transactions,
                previous,
                rate_table=self._rate_table,
                target_currency=target_currency,
            ),
            year=year,
            month=month,
        )
        self._logger.info(
            f"Goals report {year}-{month:02d}: adherence "
            f"{report.adherence_rate}%, {report.over_budget_count} over budget"
        )
        return MonthlyGoalsView(
            year=year,
            month=month,
            currency_code=target_currency,
            report=report,
        )


__all__ = ["GetMonthlyGoalsReportUseCase", "MonthlyGoalsView"]
