"""Domain models for category budgets."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class BudgetStatus(str, Enum):
    """Classification of spend against a budget limit."""

    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    OVER = "over"


@dataclass(frozen=True)
class CategoryGoal:
    """Monthly spending cap for a category, in the user's currency."""

    id: str
    category: str
    budget_limit: Decimal
    period: str = "monthly"
    created_at: datetime | None = None


@dataclass(frozen=True)
class GoalPerformance:
    """Evaluated goal for the current period."""

    goal_id: str
    category: str
    budget_limit: Decimal
    spent: Decimal
    percentage: Decimal
    status: BudgetStatus
    previous_spent: Decimal = Decimal("0")
    change_from_previous: Decimal = Decimal("0")

    @property
    def remaining(self) -> Decimal:
        """Return budget left, negative once exceeded."""
        return self.budget_limit - self.spent


@dataclass(frozen=True)
class MonthlyGoalsReport:
    """Summary of every goal for one calendar month."""

    month: str
    year: int
    total_budget: Decimal
    total_spent: Decimal
    adherence_rate: int
    within_budget_count: int
    over_budget_count: int
    best: GoalPerformance | None
    worst: GoalPerformance | None
    categories: list[GoalPerformance] = field(default_factory=list)


__all__ = [
    "BudgetStatus",
    "CategoryGoal",
    "GoalPerformance",
    "MonthlyGoalsReport",
]
