"""SQLAlchemy implementation of TransactionRepository."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select

from app.spend_alerts.domain.repositories.transaction_repository import TransactionRepository
from app.spend_alerts.infrastructure.db.models import TransactionModel
from app.spend_alerts.infrastructure.repositories.base import SqlRepository

EXPENSE = "expense"


class SqlTransactionRepository(SqlRepository, TransactionRepository):
    """SQLAlchemy-based implementation of the TransactionRepository interface."""

    async def sum_expenses(
        self,
        user_id: str,
        category: str,
        start: datetime,
        end: datetime,
    ) -> Decimal:
        """Sum expense amounts in a category within an inclusive window."""
        stmt = select(func.coalesce(func.sum(TransactionModel.amount), 0)).where(
            TransactionModel.user_id == user_id,
            TransactionModel.category == category,
            TransactionModel.type == EXPENSE,
            TransactionModel.date >= start,
            TransactionModel.date <= end,
        )
        async with self._transaction("sum period expenses") as session:
            total = (await session.execute(stmt)).scalar_one()
            return Decimal(str(total))

    async def sum_lifetime_expenses(self, user_id: str) -> Decimal:
        """Sum every expense the user has ever recorded."""
        stmt = select(func.coalesce(func.sum(TransactionModel.amount), 0)).where(
            TransactionModel.user_id == user_id,
            TransactionModel.type == EXPENSE,
        )
        async with self._transaction("sum lifetime expenses") as session:
            total = (await session.execute(stmt)).scalar_one()
            return Decimal(str(total))
