"""Tests for the period report, goal and wallet use cases."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.use_cases.get_category_goals import (
    GetCategoryGoalsUseCase,
)
from moneyquest_ledger.application.use_cases.get_monthly_goals_report import (
    GetMonthlyGoalsReportUseCase,
)
from moneyquest_ledger.application.use_cases.get_period_report import (
    GetPeriodReportUseCase,
)
from moneyquest_ledger.application.use_cases.get_wallet_balances import (
    GetWalletBalancesUseCase,
)
from moneyquest_ledger.domain.constants import EXPENSE, INCOME
from moneyquest_ledger.domain.models import (
    BudgetStatus,
    CategoryGoal,
    ExchangeRate,
    Period,
    Transaction,
    Wallet,
)
from moneyquest_ledger.domain.services.fx import RateTable

MARCH = Period(start=date(2024, 3, 1), end=date(2024, 3, 31))


def _fresh_table() -> RateTable:
    return RateTable(
        [
            ExchangeRate(
                base_currency="USD",
                target_currency="BRL",
                rate=Decimal("5"),
                updated_at=datetime.now(timezone.utc) - timedelta(hours=2),
            )
        ]
    )


def _transactions() -> list[Transaction]:
    return [
        Transaction("1", Decimal("10"), "USD", EXPENSE, "Food", date(2024, 3, 4)),
        Transaction("2", Decimal("30"), "BRL", EXPENSE, "Fun", date(2024, 3, 5)),
        Transaction("3", Decimal("500"), "BRL", INCOME, "Pay", date(2024, 3, 1)),
        Transaction("4", Decimal("40"), "BRL", EXPENSE, "Food", date(2024, 2, 9)),
    ]


def test_period_report_aggregates_both_periods() -> None:
    """The report should fetch both periods in one call and compare them."""
    source = MagicMock()
    source.fetch_transactions.return_value = _transactions()
    logger = MagicMock()
    use_case = GetPeriodReportUseCase(source, _fresh_table(), logger=logger)

    report = use_case.execute("u1", MARCH, "BRL", today=date(2024, 3, 31))

    source.fetch_transactions.assert_called_once_with(
        "u1",
        start_date=date(2024, 1, 30),
        end_date=date(2024, 3, 31),
    )
    current = report.comparison.current
    assert current.total_expenses == Decimal("80")
    assert current.total_income == Decimal("500")
    assert report.comparison.previous.total_expenses == Decimal("40")
    assert report.comparison.expense_change == Decimal("100")
    assert len(report.cashflow) == 31
    assert report.cashflow[-1].cumulative_balance == Decimal("420")
    assert report.rates_stale is False
    assert report.error is None
    logger.warning.assert_not_called()


def test_period_report_compares_against_given_previous_month() -> None:
    """A late-January expense must not count as February spending."""
    source = MagicMock()
    source.fetch_transactions.return_value = [
        Transaction("1", Decimal("100"), "BRL", EXPENSE, "Rent", date(2025, 1, 30)),
        Transaction("2", Decimal("100"), "BRL", EXPENSE, "Rent", date(2025, 3, 5)),
    ]
    march = Period(start=date(2025, 3, 1), end=date(2025, 3, 31))
    february = Period(start=date(2025, 2, 1), end=date(2025, 2, 28))
    use_case = GetPeriodReportUseCase(source, _fresh_table(), logger=MagicMock())

    report = use_case.execute(
        "u1",
        march,
        "BRL",
        today=date(2025, 3, 31),
        previous=february,
    )

    source.fetch_transactions.assert_called_once_with(
        "u1",
        start_date=date(2025, 2, 1),
        end_date=date(2025, 3, 31),
    )
    assert report.comparison.previous.period_start == date(2025, 2, 1)
    assert report.comparison.previous.total_expenses == Decimal("0")
    assert report.comparison.expense_change == Decimal("0")
    assert report.comparison.current.total_expenses == Decimal("100")


def test_period_report_flags_stale_rates() -> None:
    source = MagicMock()
    source.fetch_transactions.return_value = []
    logger = MagicMock()
    use_case = GetPeriodReportUseCase(source, RateTable(), logger=logger)

    report = use_case.execute("u1", MARCH, "BRL")

    assert report.rates_stale is True
    logger.warning.assert_called_once()


def test_period_report_returns_error_view_on_failure() -> None:
    source = MagicMock()
    source.fetch_transactions.side_effect = DataSourceUnavailable("down")
    logger = MagicMock()
    use_case = GetPeriodReportUseCase(source, _fresh_table(), logger=logger)

    report = use_case.execute("u1", MARCH, "USD")

    assert report.error == "down"
    assert report.comparison.current.total_expenses == 0
    assert report.comparison.current.currency_code == "USD"
    assert report.cashflow == []
    logger.error.assert_called_once()


def _goal_store(goals) -> MagicMock:
    store = MagicMock()
    store.fetch_goals.return_value = goals
    return store


def test_category_goals_flag_categories_near_limit() -> None:
    goals = [
        CategoryGoal("g1", "Food", Decimal("60")),
        CategoryGoal("g2", "Fun", Decimal("100")),
    ]
    source = MagicMock()
    source.fetch_transactions.return_value = _transactions()
    use_case = GetCategoryGoalsUseCase(
        _goal_store(goals),
        source,
        _fresh_table(),
        logger=MagicMock(),
    )

    view = use_case.execute("u1", "BRL", today=date(2024, 3, 20))

    assert view.period == MARCH
    food, fun = view.performances
    assert food.spent == Decimal("50.00")
    assert food.previous_spent == Decimal("40")
    assert food.status is BudgetStatus.WARNING
    assert fun.status is BudgetStatus.EXCELLENT
    assert view.near_limit == ["Food"]
    assert view.error is None


def test_category_goals_error_view() -> None:
    store = MagicMock()
    store.fetch_goals.side_effect = DataSourceUnavailable("no goals")
    use_case = GetCategoryGoalsUseCase(
        store,
        MagicMock(),
        _fresh_table(),
        logger=MagicMock(),
    )

    view = use_case.execute("u1", "BRL", period=MARCH)

    assert view.error == "no goals"
    assert view.performances == []


def test_monthly_goals_report_builds_summary() -> None:
    goals = [
        CategoryGoal("g1", "Food", Decimal("40")),
        CategoryGoal("g2", "Fun", Decimal("100")),
    ]
    source = MagicMock()
    source.fetch_transactions.return_value = _transactions()
    use_case = GetMonthlyGoalsReportUseCase(
        _goal_store(goals),
        source,
        _fresh_table(),
        logger=MagicMock(),
    )

    view = use_case.execute("u1", 2024, 3, "BRL")

    source.fetch_transactions.assert_called_once_with(
        "u1",
        start_date=date(2024, 2, 1),
        end_date=date(2024, 3, 31),
    )
    report = view.report
    assert report.month == "March"
    assert report.total_spent == Decimal("80.00")
    assert report.over_budget_count == 1
    assert report.worst.category == "Food"
    assert report.best.category == "Fun"
    assert report.adherence_rate == 100


def test_monthly_goals_report_without_goals_skips_transactions() -> None:
    source = MagicMock()
    use_case = GetMonthlyGoalsReportUseCase(
        _goal_store([]),
        source,
        _fresh_table(),
        logger=MagicMock(),
    )

    view = use_case.execute("u1", 2024, 3, "BRL")

    assert view.report is None
    assert view.error is None
    source.fetch_transactions.assert_not_called()


def test_monthly_goals_report_error_view() -> None:
    source = MagicMock()
    source.fetch_transactions.side_effect = DataSourceUnavailable("down")
    use_case = GetMonthlyGoalsReportUseCase(
        _goal_store([CategoryGoal("g1", "Food", Decimal("40"))]),
        source,
        _fresh_table(),
        logger=MagicMock(),
    )

    view = use_case.execute("u1", 2024, 3, "BRL")

    assert view.report is None
    assert view.error == "down"


def test_wallet_balances_use_case() -> None:
    wallet_source = MagicMock()
    wallet_source.fetch_wallets.return_value = [
        Wallet("w1", "Checking", "BRL", Decimal("100")),
        Wallet("w2", "Dollars", "USD", Decimal("20")),
    ]
    use_case = GetWalletBalancesUseCase(
        wallet_source,
        _fresh_table(),
        logger=MagicMock(),
    )

    view = use_case.execute("u1", "BRL")

    assert view.balances.total == Decimal("200.00")
    assert view.balances.by_currency["USD"] == Decimal("20")


def test_wallet_balances_error_view() -> None:
    wallet_source = MagicMock()
    wallet_source.fetch_wallets.side_effect = DataSourceUnavailable("down")
    use_case = GetWalletBalancesUseCase(
        wallet_source,
        _fresh_table(),
        logger=MagicMock(),
    )

    view = use_case.execute("u1", "EUR")

    assert view.error == "down"
    assert view.balances.total == 0
    assert view.balances.currency_code == "EUR"
