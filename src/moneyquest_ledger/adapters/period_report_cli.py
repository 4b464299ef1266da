"""CLI adapter printing the monthly period report for one user."""

from moneyquest_ledger.adapters.cli_common import rates_banner, report_month
from moneyquest_ledger.application.use_cases.get_period_report import (
    GetPeriodReportUseCase,
)
from moneyquest_ledger.domain.services.formatting import format_percent
from moneyquest_ledger.domain.services.periods import previous_month
from moneyquest_ledger.infrastructure.container import (
    build_currency_context,
    build_database_adapter,
    build_exchange_rate_service,
    build_transaction_source,
)
from moneyquest_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from moneyquest_ledger.infrastructure.settings import LedgerSettings


def main() -> None:
    """Run the period report and print totals and top categories."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    if not settings.user_id:
        logger.warning("LEDGER_USER_ID is required to build a report.")
        return

    db_adapter = build_database_adapter()
    rate_service = build_exchange_rate_service(db_adapter, settings)
    rates_state = rate_service.load_rates()
    context = build_currency_context(
        settings.user_id,
        rate_service.rate_table,
        db_adapter,
    )
    period = report_month(logger)
    get_usage_logger().info(
        f"period_report user={settings.user_id} month={period.start:%Y-%m}"
    )

    use_case = GetPeriodReportUseCase(
        build_transaction_source(db_adapter, settings),
        rate_service.rate_table,
        logger=logger,
    )
    report = use_case.execute(
        settings.user_id,
        period,
        context.currency,
        previous=previous_month(period),
    )

    banner = rates_banner(rates_state)
    if banner:
        print(banner)
    if report.error:
        print(f"Transactions unavailable: {report.error}")
        return

    comparison = report.comparison
    current = comparison.current
    print(f"Report {period.start} to {period.end} ({context.currency})")
    print(
        f"Income: {context.format_currency(current.total_income)} "
        f"({format_percent(comparison.income_change)})"
    )
    print(
        f"Expenses: {context.format_currency(current.total_expenses)} "
        f"({format_percent(comparison.expense_change)})"
    )
    print(
        f"Result: {context.format_currency(current.net_result)} "
        f"({format_percent(comparison.result_change)})"
    )
    for item in comparison.top_categories:
        print(
            f"  {item.category}: {context.format_currency(item.current_total)}"
            f" ({format_percent(item.change)})"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
