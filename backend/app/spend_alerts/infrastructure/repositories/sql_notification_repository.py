"""SQLAlchemy implementation of NotificationRepository."""

from datetime import datetime
from typing import List

from sqlalchemy import delete, desc, func, select

from app.spend_alerts.domain.entities.notification import NotificationRecord
from app.spend_alerts.domain.repositories.notification_repository import (
    NotificationRepository,
)
from app.spend_alerts.infrastructure.db.models import NotificationModel
from app.spend_alerts.infrastructure.repositories.base import SqlRepository


class SqlNotificationRepository(SqlRepository, NotificationRepository):
    """SQLAlchemy-based implementation of the NotificationRepository interface."""

    async def append(self, record: NotificationRecord) -> NotificationRecord:
        """Insert a new audit record."""
        model = self._to_model(record)
        async with self._transaction("append notification") as session:
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model)

    async def get_for_user(
        self, user_id: str, limit: int = 50, offset: int = 0
    ) -> List[NotificationRecord]:
        """Retrieve a user's notifications, newest first."""
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(desc(NotificationModel.timestamp), desc(NotificationModel.id))
            .limit(limit)
            .offset(offset)
        )
        async with self._transaction("list notifications") as session:
            result = await session.execute(stmt)
            return [self._to_entity(m) for m in result.scalars().all()]

    async def count_for_user(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(NotificationModel).where(
            NotificationModel.user_id == user_id
        )
        async with self._transaction("count notifications") as session:
            return (await session.execute(stmt)).scalar_one()

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every record with a timestamp strictly before cutoff."""
        stmt = (
            delete(NotificationModel)
            .where(NotificationModel.timestamp < cutoff)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("delete old notifications") as session:
            result = await session.execute(stmt)
            return result.rowcount or 0

    def _to_entity(self, model: NotificationModel) -> NotificationRecord:
        """Convert a NotificationModel to a NotificationRecord domain entity."""
        return NotificationRecord(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            body=model.body,
            data=dict(model.data or {}),
            read=model.read,
            timestamp=model.timestamp,
        )

    def _to_model(self, entity: NotificationRecord) -> NotificationModel:
        """Convert a NotificationRecord domain entity to a NotificationModel."""
        return NotificationModel(
            id=entity.id,
            user_id=entity.user_id,
            type=entity.type,
            title=entity.title,
            body=entity.body,
            timestamp=entity.timestamp,
            read=entity.read,
            data=entity.data,
        )
