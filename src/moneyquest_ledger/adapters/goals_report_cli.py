"""CLI adapter printing the monthly goals report for one user."""

from moneyquest_ledger.adapters.cli_common import rates_banner, report_month
from moneyquest_ledger.application.use_cases.get_monthly_goals_report import (
    GetMonthlyGoalsReportUseCase,
)
from moneyquest_ledger.infrastructure.container import (
    build_currency_context,
    build_database_adapter,
    build_exchange_rate_service,
    build_goal_store,
    build_transaction_source,
)
from moneyquest_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from moneyquest_ledger.infrastructure.settings import LedgerSettings


def main() -> None:
    """Run the monthly goals report and print one line per category."""
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
        f"goals_report user={settings.user_id} month={period.start:%Y-%m}"
    )

    use_case = GetMonthlyGoalsReportUseCase(
        build_goal_store(db_adapter),
        build_transaction_source(db_adapter, settings),
        rate_service.rate_table,
        logger=logger,
    )
    view = use_case.execute(
        settings.user_id,
        period.start.year,
        period.start.month,
        context.currency,
    )

    banner = rates_banner(rates_state)
    if banner:
        print(banner)
    if view.error:
        print(f"Goals unavailable: {view.error}")
        return
    report = view.report
    if report is None:
        print("No category goals configured.")
        return

    print(
        f"Goals {report.month} {report.year}: adherence "
        f"{report.adherence_rate}%, {report.within_budget_count} within, "
        f"{report.over_budget_count} over budget"
    )
    print(
        f"Spent {context.format_currency(report.total_spent)} of "
        f"{context.format_currency(report.total_budget)}"
    )
    for item in report.categories:
        print(
            f"  {item.category}: {context.format_currency(item.spent)} / "
            f"{context.format_currency(item.budget_limit)} "
            f"({item.percentage:.0f}%, {item.status.value})"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
