"""SQLAlchemy-backed repository for category goals."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.database import DatabaseEnginePort
from moneyquest_ledger.application.ports.goal_store import GoalStorePort
from moneyquest_ledger.domain.models import CategoryGoal
from moneyquest_ledger.utils.decimal_utils import coerce_decimal


class SqlAlchemyGoalRepository(GoalStorePort):
    """Repository reading the category_goals table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def fetch_goals(self, user_id: str) -> list[CategoryGoal]:
        """Return the user's goals ordered by category.

        Raises:
            DataSourceUnavailable: When the query fails.
        """
        query = text(
            """
            SELECT id, category, budget_limit, created_at
            FROM category_goals
            WHERE user_id = :user_id
            ORDER BY category
            """
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                rows = conn.execute(query, {"user_id": user_id}).all()
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(
                f"Could not fetch category goals: {exc}"
            ) from exc
        return [
            CategoryGoal(
                id=str(row.id),
                category=row.category,
                budget_limit=coerce_decimal(row.budget_limit),
                created_at=row.created_at,
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyGoalRepository"]
