"""Domain entities for the spend alert engine.

This module exports the core business entities used throughout the domain layer.
"""

from app.spend_alerts.domain.entities.achievement import Achievement, achievement_key
from app.spend_alerts.domain.entities.budget import Budget, BudgetAlertFlag
from app.spend_alerts.domain.entities.notification import NotificationRecord, NotificationType
from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem
from app.spend_alerts.domain.entities.user import (
    NotificationPreference,
    NotificationSettings,
    UserProfile,
)

__all__ = [
    "Achievement",
    "Budget",
    "BudgetAlertFlag",
    "NotificationPreference",
    "NotificationRecord",
    "NotificationSettings",
    "NotificationType",
    "TrackedPriceItem",
    "UserProfile",
    "achievement_key",
]
