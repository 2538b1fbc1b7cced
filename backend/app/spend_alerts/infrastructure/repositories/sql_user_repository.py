"""SQLAlchemy implementation of UserRepository."""

from typing import List, Optional

from sqlalchemy import select

from app.spend_alerts.domain.entities.user import (
    NotificationPreference,
    NotificationSettings,
    UserProfile,
)
from app.spend_alerts.domain.repositories.user_repository import UserRepository
from app.spend_alerts.infrastructure.db.models import UserModel
from app.spend_alerts.infrastructure.repositories.base import SqlRepository

_PREFERENCE_COLUMNS = {
    NotificationPreference.ENABLED: UserModel.notifications_enabled,
    NotificationPreference.BUDGET_ALERTS: UserModel.budget_alerts,
    NotificationPreference.SPENDING_INSIGHTS: UserModel.spending_insights,
    NotificationPreference.PRICE_DROPS: UserModel.price_drops,
}


class SqlUserRepository(SqlRepository, UserRepository):
    """SQLAlchemy-based implementation of the UserRepository interface."""

    async def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Retrieve a user profile by its identifier."""
        async with self._transaction("get user") as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    async def get_eligible(self, preference: NotificationPreference) -> List[UserProfile]:
        """Retrieve users with notifications enabled and the preference on."""
        stmt = select(UserModel).where(UserModel.notifications_enabled.is_(True))
        if preference is not NotificationPreference.ENABLED:
            stmt = stmt.where(_PREFERENCE_COLUMNS[preference].is_(True))

        async with self._transaction("list eligible users") as session:
            result = await session.execute(stmt.order_by(UserModel.id))
            return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: UserModel) -> UserProfile:
        """Convert a UserModel to a UserProfile domain entity."""
        return UserProfile(
            id=model.id,
            fcm_token=model.fcm_token,
            notification_settings=NotificationSettings(
                enabled=model.notifications_enabled,
                budget_alerts=model.budget_alerts,
                spending_insights=model.spending_insights,
                price_drops=model.price_drops,
            ),
        )
