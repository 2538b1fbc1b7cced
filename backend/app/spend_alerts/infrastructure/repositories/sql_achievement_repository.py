"""SQLAlchemy implementation of AchievementRepository.

Creation uses PostgreSQL's INSERT ... ON CONFLICT DO NOTHING on the
achievement key, so only one of several concurrent inserts reports a row.
"""

from typing import Set

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert

from app.spend_alerts.domain.entities.achievement import (
    SPENDING_MILESTONE,
    Achievement,
    achievement_key,
)
from app.spend_alerts.domain.repositories.achievement_repository import AchievementRepository
from app.spend_alerts.infrastructure.db.models import AchievementModel
from app.spend_alerts.infrastructure.repositories.base import SqlRepository


class SqlAchievementRepository(SqlRepository, AchievementRepository):
    """SQLAlchemy-based implementation of the AchievementRepository interface."""

    async def get_milestones_for_user(self, user_id: str) -> Set[int]:
        """Return the milestone values the user already has achievements for."""
        stmt = select(AchievementModel.milestone).where(
            AchievementModel.user_id == user_id,
            AchievementModel.type == SPENDING_MILESTONE,
        )
        async with self._transaction("list achievements") as session:
            result = await session.execute(stmt)
            return set(result.scalars().all())

    async def create_if_absent(self, achievement: Achievement) -> bool:
        """Insert the achievement unless its key already exists."""
        stmt = (
            insert(AchievementModel)
            .values(
                key=achievement.key,
                user_id=achievement.user_id,
                type=achievement.type,
                milestone=achievement.milestone,
                total_spending=achievement.total_spending,
                achieved_at=achievement.achieved_at,
            )
            .on_conflict_do_nothing(index_elements=[AchievementModel.key])
        )
        async with self._transaction("create achievement") as session:
            result = await session.execute(stmt)
            return result.rowcount == 1

    async def delete(self, user_id: str, milestone: int) -> bool:
        """Remove the achievement for (user, milestone)."""
        stmt = delete(AchievementModel).where(
            AchievementModel.key == achievement_key(user_id, milestone)
        )
        async with self._transaction("delete achievement") as session:
            result = await session.execute(stmt)
            return result.rowcount == 1
