"""Database infrastructure components.

This module exports SQLAlchemy models, session management utilities,
and the Base class for ORM model definitions.
"""

from app.spend_alerts.infrastructure.db.models import (
    AchievementModel,
    Base,
    BudgetModel,
    NotificationModel,
    PriceTrackingModel,
    TransactionModel,
    UserModel,
)
from app.spend_alerts.infrastructure.db.session import (
    create_engine,
    create_session_factory,
    dispose_engine,
    get_async_session_local,
    get_engine,
    get_session_factory,
)

__all__ = [
    # Base class
    "Base",
    # Models
    "UserModel",
    "BudgetModel",
    "TransactionModel",
    "PriceTrackingModel",
    "AchievementModel",
    "NotificationModel",
    # Session utilities
    "create_engine",
    "create_session_factory",
    "dispose_engine",
    "get_engine",
    "get_async_session_local",
    "get_session_factory",
]
