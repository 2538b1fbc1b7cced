# Domain layer - pure business rules, no framework dependencies

from app.spend_alerts.domain.entities import (
    Achievement,
    Budget,
    BudgetAlertFlag,
    NotificationPreference,
    NotificationRecord,
    NotificationType,
    TrackedPriceItem,
    UserProfile,
)
from app.spend_alerts.domain.services.threshold_registry import (
    BUDGET_BANDS,
    COACHING_TIPS,
    SPENDING_MILESTONES,
    BudgetBand,
    CoachingTip,
    percentage_used,
)

__all__ = [
    # Entities and enums
    "Achievement",
    "Budget",
    "BudgetAlertFlag",
    "NotificationPreference",
    "NotificationRecord",
    "NotificationType",
    "TrackedPriceItem",
    "UserProfile",
    # Threshold registry
    "BudgetBand",
    "CoachingTip",
    "BUDGET_BANDS",
    "COACHING_TIPS",
    "SPENDING_MILESTONES",
    "percentage_used",
]
