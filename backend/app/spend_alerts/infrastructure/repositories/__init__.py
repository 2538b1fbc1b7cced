"""Infrastructure repository implementations.

This module exports concrete SQLAlchemy-based repository implementations
that satisfy the domain repository interfaces.
"""

from app.spend_alerts.infrastructure.repositories.sql_achievement_repository import (
    SqlAchievementRepository,
)
from app.spend_alerts.infrastructure.repositories.sql_budget_repository import (
    SqlBudgetRepository,
)
from app.spend_alerts.infrastructure.repositories.sql_notification_repository import (
    SqlNotificationRepository,
)
from app.spend_alerts.infrastructure.repositories.sql_price_tracking_repository import (
    SqlPriceTrackingRepository,
)
from app.spend_alerts.infrastructure.repositories.sql_transaction_repository import (
    SqlTransactionRepository,
)
from app.spend_alerts.infrastructure.repositories.sql_user_repository import SqlUserRepository

__all__ = [
    "SqlAchievementRepository",
    "SqlBudgetRepository",
    "SqlNotificationRepository",
    "SqlPriceTrackingRepository",
    "SqlTransactionRepository",
    "SqlUserRepository",
]
