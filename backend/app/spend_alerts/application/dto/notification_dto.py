"""Data Transfer Objects for the notification audit trail API.

These DTOs represent the external contract for reading a user's
notification history. They are decoupled from domain entities and
optimized for JSON serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.spend_alerts.domain.entities.notification import NotificationRecord, NotificationType


class NotificationDTO(BaseModel):
    """A single audit record as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Unique notification identifier")
    user_id: str = Field(description="Recipient user")
    type: NotificationType = Field(description="Kind of notification")
    title: str = Field(description="Notification title")
    body: str = Field(description="Notification body")
    read: bool = Field(default=False, description="Whether the user opened it")
    timestamp: datetime = Field(description="When the notification was recorded (UTC)")
    data: dict[str, Any] = Field(default_factory=dict, description="Structured payload")

    @classmethod
    def from_entity(cls, record: NotificationRecord) -> "NotificationDTO":
        return cls(
            id=record.id,  # type: ignore[arg-type]
            user_id=record.user_id,
            type=record.type,
            title=record.title,
            body=record.body,
            read=record.read,
            timestamp=record.timestamp,
            data=record.data,
        )


class NotificationListDTO(BaseModel):
    """Paginated list of notifications for API responses."""

    notifications: list[NotificationDTO] = Field(
        default_factory=list, description="List of notifications"
    )
    total: int = Field(description="Total number of notifications for the user")
    page: int = Field(default=1, ge=1, description="Current page number")
    page_size: int = Field(default=20, ge=1, le=100, description="Notifications per page")
