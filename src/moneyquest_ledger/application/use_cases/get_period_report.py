"""Use case building the period report shown on the dashboard."""

from dataclasses import dataclass, field
from datetime import date

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.transaction_source import (
    TransactionSourcePort,
)
from moneyquest_ledger.domain.models import (
    CashflowPoint,
    Period,
    PeriodComparison,
    ReportFilters,
)
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.domain.services.ledger import (
    ZERO,
    cashflow_timeline,
    compare_periods,
    empty_result,
)
from moneyquest_ledger.domain.services.periods import previous_period
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PeriodReport:
    """Totals, comparison and cash flow for one period.

    Attributes:
        period: Reported calendar range.
        currency_code: Display currency of every amount.
        comparison: Current and previous aggregations with deltas.
        cashflow: Bucketed income and expenses with running balance.
        rates_stale: True when the rates used are older than the threshold.
        error: Message when transactions could not be fetched.
    """

    period: Period
    currency_code: str
    comparison: PeriodComparison
    cashflow: list[CashflowPoint] = field(default_factory=list)
    rates_stale: bool = False
    error: str | None = None


class GetPeriodReportUseCase:
    """Aggregate a user's transactions for a period and the one before."""

    def __init__(
        self,
        transaction_source: TransactionSourcePort,
        rate_table: RateTable,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_source: Port providing the user's transactions.
            rate_table: Session rates used for every conversion.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transaction_source = transaction_source
        self._rate_table = rate_table
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        period: Period,
        target_currency: str,
        filters: ReportFilters | None = None,
        today: date | None = None,
        previous: Period | None = None,
    ) -> PeriodReport:
        """Return the report for `period` in `target_currency`.

        Args:
            user_id: Owner of the transactions.
            period: Inclusive calendar range to report.
            target_currency: Display currency.
            filters: Optional report filters.
            today: Reference date for the future-transaction filter.
            previous: Period compared against; defaults to the same-length
                period before `period`.

        Returns:
            PeriodReport: Report with `error` set and zeroed totals when the
            transaction source is unavailable.
        """
        previous = previous or previous_period(period)
        rates_stale = self._rate_table.is_stale()
        if rates_stale:
            self._logger.warning(
                "Reporting with stale exchange rates; last update="
                f"{self._rate_table.last_update}"
            )

        try:
            transactions = self._transaction_source.fetch_transactions(
                user_id,
                start_date=min(previous.start, period.start),
                end_date=period.end,
            )
        except DataSourceUnavailable as exc:
            self._logger.error(f"Error fetching transactions: {exc}")
            return PeriodReport(
                period=period,
                currency_code=target_currency,
                comparison=_empty_comparison(
                    period,
                    previous,
                    target_currency,
                ),
                rates_stale=rates_stale,
                error=str(exc),
            )
        self._logger.info(
            f"Fetched {len(transactions)} transactions for {user_id}"
        )

        comparison = compare_periods(
            transactions,
            period,
            rate_table=self._rate_table,
            target_currency=target_currency,
            filters=filters,
            today=today,
            previous=previous,
        )
        cashflow = cashflow_timeline(
            transactions,
            period,
            rate_table=self._rate_table,
            target_currency=target_currency,
            filters=filters,
            today=today,
        )
        self._logger.info(
            f"Period {period.start}..{period.end}: income "
            f"{comparison.current.total_income}, expenses "
            f"{comparison.current.total_expenses} {target_currency}"
        )
        return PeriodReport(
            period=period,
            currency_code=target_currency,
            comparison=comparison,
            cashflow=cashflow,
            rates_stale=rates_stale,
        )


def _empty_comparison(
    period: Period,
    previous: Period,
    currency: str,
) -> PeriodComparison:
    return PeriodComparison(
        current=empty_result(currency, period),
        previous=empty_result(currency, previous),
        income_change=ZERO,
        expense_change=ZERO,
        result_change=ZERO,
        top_categories=[],
    )


__all__ = ["GetPeriodReportUseCase", "PeriodReport"]
