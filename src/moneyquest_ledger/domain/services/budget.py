"""Domain services for category budget evaluation."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from moneyquest_ledger.domain.constants import (
    EXCELLENT_MAX_RATIO,
    GOOD_MAX_RATIO,
    INCOME,
    NEAR_LIMIT_PERCENTAGE,
)
from moneyquest_ledger.domain.models import (
    BudgetStatus,
    CategoryGoal,
    GoalPerformance,
    MonthlyGoalsReport,
    Period,
    Transaction,
)
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.domain.services.ledger import (
    filter_transactions,
    percent_change,
)
from moneyquest_ledger.domain.services.periods import MONTH_NAMES
from moneyquest_ledger.utils.decimal_utils import coerce_decimal, round_money

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def classify_spend(spent, limit) -> BudgetStatus:
    """Classify spend against a limit with fixed breakpoints.

    `spent/limit` up to 50% is excellent, up to 80% good, below 100% a
    warning, and 100% or more is over budget.

    Args:
        spent: Amount spent in the user's currency.
        limit: Budget limit in the user's currency.

    Returns:
        BudgetStatus: Current classification.
    """
    spent = coerce_decimal(spent)
    limit = coerce_decimal(limit)
    if limit <= 0:
        return BudgetStatus.OVER if spent > 0 else BudgetStatus.EXCELLENT
    ratio = spent / limit
    if ratio <= EXCELLENT_MAX_RATIO:
        return BudgetStatus.EXCELLENT
    if ratio <= GOOD_MAX_RATIO:
        return BudgetStatus.GOOD
    if ratio < ONE:
        return BudgetStatus.WARNING
    return BudgetStatus.OVER


def evaluate(goal: CategoryGoal, spent) -> BudgetStatus:
    """Classify a goal given spend already converted to the user's currency."""
    return classify_spend(spent, goal.budget_limit)


def usage_percentage(spent, limit) -> Decimal:
    """Return spent as a percentage of the limit, 0 for non-positive limits."""
    limit = coerce_decimal(limit)
    if limit <= 0:
        return ZERO
    return coerce_decimal(spent) / limit * HUNDRED


def near_limit(goal: CategoryGoal, spent) -> bool:
    """Return True once spend reaches 80% of the goal."""
    return usage_percentage(spent, goal.budget_limit) >= NEAR_LIMIT_PERCENTAGE


def spent_by_category(
    transactions: Iterable[Transaction],
    period: Period,
    *,
    rate_table: RateTable,
    target_currency: str,
) -> dict[str, Decimal]:
    """Sum expenses per category, converted with the current rates.

    Historical transactions are valued at today's rates, so the result can
    change after a rate refresh.
    """
    totals: dict[str, Decimal] = {}
    for tx in filter_transactions(transactions, period):
        if tx.type == INCOME:
            continue
        amount = rate_table.convert(tx.amount, tx.currency, target_currency)
        totals[tx.category] = totals.get(tx.category, ZERO) + amount
    return totals


def build_goal_performances(
    goals: Iterable[CategoryGoal],
    current_spent: Mapping[str, Decimal],
    previous_spent: Mapping[str, Decimal] | None = None,
) -> list[GoalPerformance]:
    """Evaluate every goal against current and previous spend.

    Args:
        goals: Configured category goals.
        current_spent: Spend per category for the evaluated period.
        previous_spent: Spend per category for the period before.

    Returns:
        list[GoalPerformance]: One entry per goal, in goal order.
    """
    previous_spent = previous_spent or {}
    performances = []
    for goal in goals:
        spent = current_spent.get(goal.category, ZERO)
        previous = previous_spent.get(goal.category, ZERO)
        performances.append(
            GoalPerformance(
                goal_id=goal.id,
                category=goal.category,
                budget_limit=goal.budget_limit,
                spent=spent,
                percentage=usage_percentage(spent, goal.budget_limit),
                status=evaluate(goal, spent),
                previous_spent=previous,
                change_from_previous=percent_change(spent, previous),
            )
        )
    return performances


def adherence_rate(total_budget: Decimal, total_spent: Decimal) -> int:
    """Return how much of the budget was respected, capped at 100.

    Overspend is subtracted from the budget and the result is not floored,
    so spending more than twice the budget gives a negative rate. No budget
    means 100.
    """
    if total_budget <= 0:
        return 100
    overspend = max(ZERO, total_spent - total_budget)
    rate = (total_budget - overspend) / total_budget * HUNDRED
    rounded = int(round_money(rate, ONE))
    return min(100, rounded)


def build_monthly_goals_report(
    goals: Iterable[CategoryGoal],
    current_spent: Mapping[str, Decimal],
    previous_spent: Mapping[str, Decimal] | None,
    *,
    year: int,
    month: int,
) -> MonthlyGoalsReport | None:
    """Summarize all goals for a month.

    Args:
        goals: Configured category goals.
        current_spent: Spend per category for the month.
        previous_spent: Spend per category for the month before.
        year: Report year.
        month: Report month, 1-12.

    Returns:
        MonthlyGoalsReport | None: Report sorted by usage, or None when the
        user has no goals.
    """
    performances = build_goal_performances(
        goals,
        current_spent,
        previous_spent,
    )
    if not performances:
        return None

    ranked = sorted(performances, key=lambda item: item.percentage)
    total_budget = sum((item.budget_limit for item in ranked), ZERO)
    total_spent = sum((item.spent for item in ranked), ZERO)
    return MonthlyGoalsReport(
        month=MONTH_NAMES[month - 1],
        year=year,
        total_budget=total_budget,
        total_spent=total_spent,
        adherence_rate=adherence_rate(total_budget, total_spent),
        within_budget_count=sum(
            1 for item in ranked if not _over_budget(item)
        ),
        over_budget_count=sum(1 for item in ranked if _over_budget(item)),
        best=ranked[0],
        worst=ranked[-1],
        categories=ranked,
    )


def _over_budget(item: GoalPerformance) -> bool:
    # Spend against a zero limit has no percentage but is still over.
    if item.budget_limit <= 0:
        return item.status == BudgetStatus.OVER
    return item.percentage > HUNDRED


__all__ = [
    "classify_spend",
    "evaluate",
    "usage_percentage",
    "near_limit",
    "spent_by_category",
    "build_goal_performances",
    "adherence_rate",
    "build_monthly_goals_report",
]
