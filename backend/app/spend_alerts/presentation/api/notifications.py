"""Notification audit trail API endpoints.

- GET /api/users/{user_id}/notifications - Page through a user's
  delivered notifications, newest first
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.spend_alerts.application.dto.notification_dto import NotificationListDTO
from app.spend_alerts.application.exceptions import StoreUnavailableError
from app.spend_alerts.application.use_cases.get_user_notifications import (
    GetUserNotificationsUseCase,
)
from app.spend_alerts.infrastructure.db.session import get_session_factory
from app.spend_alerts.infrastructure.repositories.sql_notification_repository import (
    SqlNotificationRepository,
)

router = APIRouter()


@router.get("/users/{user_id}/notifications", response_model=NotificationListDTO)
async def list_user_notifications(
    user_id: Annotated[str, Path(min_length=1, max_length=128, description="User ID")],
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> NotificationListDTO:
    """List the notifications delivered to a user.

    Args:
        user_id: The recipient.
        page: Page number (1-indexed).
        page_size: Number of notifications per page.
        session_factory: Database session factory (injected).

    Returns:
        NotificationListDTO with one page of notifications and the total.

    Raises:
        HTTPException: 503 if the store cannot be reached.
    """
    use_case = GetUserNotificationsUseCase(
        notification_repository=SqlNotificationRepository(session_factory),
    )

    try:
        return await use_case.execute(user_id, page=page, page_size=page_size)
    except StoreUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        ) from e
