"""SQLAlchemy implementation of BudgetRepository.

Alert flags are claimed with a single conditional UPDATE:

    UPDATE budgets SET <flag> = true WHERE id = :id AND <flag> = false

PostgreSQL row locking serializes overlapping updates of the same row, and
the loser re-evaluates the WHERE clause against the committed value, so
exactly one caller sees rowcount == 1.
"""

from decimal import Decimal
from typing import List

from sqlalchemy import or_, select, update

from app.spend_alerts.domain.entities.budget import Budget, BudgetAlertFlag
from app.spend_alerts.domain.repositories.budget_repository import BudgetRepository
from app.spend_alerts.infrastructure.db.models import BudgetModel
from app.spend_alerts.infrastructure.repositories.base import SqlRepository


class SqlBudgetRepository(SqlRepository, BudgetRepository):
    """SQLAlchemy-based implementation of the BudgetRepository interface."""

    async def get_for_user_period(self, user_id: str, month: str) -> List[Budget]:
        """Retrieve a user's budgets for one period."""
        stmt = (
            select(BudgetModel)
            .where(BudgetModel.user_id == user_id, BudgetModel.month == month)
            .order_by(BudgetModel.id)
        )
        async with self._transaction("list budgets") as session:
            result = await session.execute(stmt)
            return [self._to_entity(m) for m in result.scalars().all()]

    async def try_mark_alert_sent(self, budget_id: int, flag: BudgetAlertFlag) -> bool:
        """Set the flag to true only if it is currently false."""
        return await self._swap_flag(budget_id, flag, expected=False, operation="claim budget flag")

    async def release_alert_flag(self, budget_id: int, flag: BudgetAlertFlag) -> bool:
        """Set the flag back to false only if it is currently true."""
        return await self._swap_flag(budget_id, flag, expected=True, operation="release budget flag")

    async def reset_alert_flags(self) -> int:
        """Clear all band flags on budgets that have any flag set."""
        stmt = (
            update(BudgetModel)
            .where(
                or_(
                    BudgetModel.seventy_five_percent_alert_sent.is_(True),
                    BudgetModel.ninety_percent_alert_sent.is_(True),
                    BudgetModel.overage_alert_sent.is_(True),
                )
            )
            .values({flag.value: False for flag in BudgetAlertFlag})
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("reset budget flags") as session:
            result = await session.execute(stmt)
            return result.rowcount or 0

    async def _swap_flag(
        self, budget_id: int, flag: BudgetAlertFlag, expected: bool, operation: str
    ) -> bool:
        column = getattr(BudgetModel, flag.value)
        stmt = (
            update(BudgetModel)
            .where(BudgetModel.id == budget_id, column.is_(expected))
            .values({flag.value: not expected})
            .execution_options(synchronize_session=False)
        )
        async with self._transaction(operation) as session:
            result = await session.execute(stmt)
            return result.rowcount == 1

    def _to_entity(self, model: BudgetModel) -> Budget:
        """Convert a BudgetModel to a Budget domain entity."""
        return Budget(
            id=model.id,
            user_id=model.user_id,
            category=model.category,
            amount=Decimal(str(model.amount)),
            month=model.month,
            seventy_five_percent_alert_sent=model.seventy_five_percent_alert_sent,
            ninety_percent_alert_sent=model.ninety_percent_alert_sent,
            overage_alert_sent=model.overage_alert_sent,
        )
