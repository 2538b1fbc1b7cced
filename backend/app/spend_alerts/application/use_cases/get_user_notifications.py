"""Use case for reading a user's notification audit trail."""

from app.spend_alerts.application.dto.notification_dto import (
    NotificationDTO,
    NotificationListDTO,
)
from app.spend_alerts.domain.repositories.notification_repository import (
    NotificationRepository,
)


class GetUserNotificationsUseCase:
    """Application service for paging through a user's audit trail."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        self._notification_repository = notification_repository

    async def execute(self, user_id: str, page: int = 1, page_size: int = 20) -> NotificationListDTO:
        """Fetch one page of a user's notifications, newest first."""
        offset = (page - 1) * page_size
        records = await self._notification_repository.get_for_user(
            user_id, limit=page_size, offset=offset
        )
        total = await self._notification_repository.count_for_user(user_id)
        return NotificationListDTO(
            notifications=[NotificationDTO.from_entity(r) for r in records],
            total=total,
            page=page,
            page_size=page_size,
        )
