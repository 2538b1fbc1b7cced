"""Data Transfer Objects for the application layer.

DTOs provide a stable contract between layers, decoupling the domain
model from external representations (API responses, task results).
"""

from app.spend_alerts.application.dto.notification_dto import (
    NotificationDTO,
    NotificationListDTO,
)
from app.spend_alerts.application.dto.run_summary_dto import RunSummary

__all__ = [
    "NotificationDTO",
    "NotificationListDTO",
    "RunSummary",
]
