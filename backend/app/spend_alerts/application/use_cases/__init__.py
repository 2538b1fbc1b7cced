"""Application use cases.

Use cases orchestrate domain logic and coordinate between repositories,
domain services and external collaborators to fulfil alert jobs.
"""

from app.spend_alerts.application.use_cases.check_budget_alerts import (
    CheckBudgetAlertsUseCase,
)
from app.spend_alerts.application.use_cases.check_milestones import CheckMilestonesUseCase
from app.spend_alerts.application.use_cases.check_price_drops import CheckPriceDropsUseCase
from app.spend_alerts.application.use_cases.cleanup_notifications import (
    CleanupNotificationsUseCase,
)
from app.spend_alerts.application.use_cases.get_user_notifications import (
    GetUserNotificationsUseCase,
)
from app.spend_alerts.application.use_cases.reset_budget_alerts import (
    ResetBudgetAlertsUseCase,
)
from app.spend_alerts.application.use_cases.run_orchestrator import AlertJob, RunOrchestrator
from app.spend_alerts.application.use_cases.send_coaching_tips import SendCoachingTipsUseCase

__all__ = [
    "AlertJob",
    "RunOrchestrator",
    "CheckBudgetAlertsUseCase",
    "CheckMilestonesUseCase",
    "CheckPriceDropsUseCase",
    "SendCoachingTipsUseCase",
    "ResetBudgetAlertsUseCase",
    "CleanupNotificationsUseCase",
    "GetUserNotificationsUseCase",
]
