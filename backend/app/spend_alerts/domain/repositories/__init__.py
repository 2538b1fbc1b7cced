"""Domain repository interfaces for the spend alert engine.

This module defines abstract repository interfaces that establish the contract
between the domain layer and the external state store. These interfaces:

- Allow the domain to remain independent of database/ORM specifics
- Expose conditional (compare-and-set) primitives for alert claims
- Support dependency injection for testing with fake repositories
- Use async methods to support non-blocking I/O operations

Concrete implementations live in the infrastructure layer
(e.g., backend/app/spend_alerts/infrastructure/repositories/).
"""

from app.spend_alerts.domain.repositories.achievement_repository import AchievementRepository
from app.spend_alerts.domain.repositories.budget_repository import BudgetRepository
from app.spend_alerts.domain.repositories.notification_repository import NotificationRepository
from app.spend_alerts.domain.repositories.price_tracking_repository import (
    PriceTrackingRepository,
)
from app.spend_alerts.domain.repositories.transaction_repository import TransactionRepository
from app.spend_alerts.domain.repositories.user_repository import UserRepository

__all__ = [
    "AchievementRepository",
    "BudgetRepository",
    "NotificationRepository",
    "PriceTrackingRepository",
    "TransactionRepository",
    "UserRepository",
]
