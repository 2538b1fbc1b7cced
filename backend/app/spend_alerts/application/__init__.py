"""Application layer - use cases and orchestration.

This layer contains:
- DTOs: Run summaries and API output
- Interfaces: Push dispatcher and price feed contracts
- Use Cases: Alert jobs, sweepers and the run orchestrator
- Exceptions: Application-level error types
"""

from app.spend_alerts.application.dto import (
    NotificationDTO,
    NotificationListDTO,
    RunSummary,
)
from app.spend_alerts.application.exceptions import (
    ApplicationError,
    MalformedEntityError,
    StoreUnavailableError,
    UnknownJobError,
)
from app.spend_alerts.application.use_cases import (
    CheckBudgetAlertsUseCase,
    CheckMilestonesUseCase,
    CheckPriceDropsUseCase,
    CleanupNotificationsUseCase,
    GetUserNotificationsUseCase,
    ResetBudgetAlertsUseCase,
    RunOrchestrator,
    SendCoachingTipsUseCase,
)

__all__ = [
    # DTOs
    "NotificationDTO",
    "NotificationListDTO",
    "RunSummary",
    # Use Cases
    "RunOrchestrator",
    "CheckBudgetAlertsUseCase",
    "CheckMilestonesUseCase",
    "CheckPriceDropsUseCase",
    "SendCoachingTipsUseCase",
    "ResetBudgetAlertsUseCase",
    "CleanupNotificationsUseCase",
    "GetUserNotificationsUseCase",
    # Exceptions
    "ApplicationError",
    "StoreUnavailableError",
    "MalformedEntityError",
    "UnknownJobError",
]
