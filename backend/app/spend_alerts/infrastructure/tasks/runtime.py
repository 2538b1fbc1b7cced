"""Dependency wiring for scheduled job runs.

Every Celery task runs its coroutine under a fresh `asyncio.run`, so the
database engine and HTTP clients are created per run and closed when the
run ends.
"""

import logging
import random
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from app.core.config import Settings, get_settings
from app.spend_alerts.application.dto.run_summary_dto import RunSummary
from app.spend_alerts.application.exceptions import UnknownJobError
from app.spend_alerts.application.interfaces.notification_dispatcher import (
    NotificationDispatcher,
)
from app.spend_alerts.application.interfaces.price_feed import PriceFeed
from app.spend_alerts.application.use_cases.check_budget_alerts import (
    CheckBudgetAlertsUseCase,
)
from app.spend_alerts.application.use_cases.check_milestones import CheckMilestonesUseCase
from app.spend_alerts.application.use_cases.check_price_drops import CheckPriceDropsUseCase
from app.spend_alerts.application.use_cases.run_orchestrator import AlertJob, RunOrchestrator
from app.spend_alerts.application.use_cases.send_coaching_tips import SendCoachingTipsUseCase
from app.spend_alerts.domain.repositories.achievement_repository import AchievementRepository
from app.spend_alerts.domain.repositories.budget_repository import BudgetRepository
from app.spend_alerts.domain.repositories.notification_repository import (
    NotificationRepository,
)
from app.spend_alerts.domain.repositories.price_tracking_repository import (
    PriceTrackingRepository,
)
from app.spend_alerts.domain.repositories.transaction_repository import TransactionRepository
from app.spend_alerts.domain.repositories.user_repository import UserRepository
from app.spend_alerts.domain.services.alert_policy import AlertPolicy
from app.spend_alerts.infrastructure.db.session import create_engine, create_session_factory
from app.spend_alerts.infrastructure.external.fcm_client import FcmClient
from app.spend_alerts.infrastructure.external.http_price_feed import HttpPriceFeed
from app.spend_alerts.infrastructure.external.simulated_price_feed import SimulatedPriceFeed
from app.spend_alerts.infrastructure.repositories import (
    SqlAchievementRepository,
    SqlBudgetRepository,
    SqlNotificationRepository,
    SqlPriceTrackingRepository,
    SqlTransactionRepository,
    SqlUserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class JobRuntime:
    """Collaborators shared by the jobs of one run."""

    settings: Settings
    users: UserRepository
    budgets: BudgetRepository
    transactions: TransactionRepository
    price_tracking: PriceTrackingRepository
    achievements: AchievementRepository
    notifications: NotificationRepository
    dispatcher: NotificationDispatcher
    price_feed: PriceFeed

    def orchestrator(self) -> RunOrchestrator:
        return RunOrchestrator(
            user_repository=self.users,
            notification_repository=self.notifications,
            dispatcher=self.dispatcher,
            max_concurrency=self.settings.alert_max_concurrency,
        )

    def policy(self) -> AlertPolicy:
        return AlertPolicy(milestones=self.settings.milestone_values)


def create_price_feed(settings: Settings, rng: Optional[random.Random] = None) -> PriceFeed:
    """Select the HTTP price feed when configured, else the simulation."""
    if settings.price_feed_base_url:
        return HttpPriceFeed(settings.price_feed_base_url)
    return SimulatedPriceFeed(
        low=settings.price_simulation_low,
        high=settings.price_simulation_high,
        rng=rng,
    )


@asynccontextmanager
async def job_runtime(settings: Optional[Settings] = None) -> AsyncIterator[JobRuntime]:
    """Open the engine and clients for one run and close them afterwards."""
    settings = settings or get_settings()
    engine = create_engine(pool_size=settings.alert_max_concurrency, settings=settings)
    dispatcher = FcmClient(
        project_id=settings.fcm_project_id or None,
        access_token=settings.fcm_access_token or None,
        timeout=settings.fcm_timeout_seconds,
    )
    price_feed = create_price_feed(settings)
    if dispatcher.dev_mode:
        logger.warning("FCM credentials not configured; notifications will only be logged")

    session_factory = create_session_factory(engine)
    try:
        yield JobRuntime(
            settings=settings,
            users=SqlUserRepository(session_factory),
            budgets=SqlBudgetRepository(session_factory),
            transactions=SqlTransactionRepository(session_factory),
            price_tracking=SqlPriceTrackingRepository(session_factory),
            achievements=SqlAchievementRepository(session_factory),
            notifications=SqlNotificationRepository(session_factory),
            dispatcher=dispatcher,
            price_feed=price_feed,
        )
    finally:
        await price_feed.close()
        await dispatcher.close()
        await engine.dispose()


def _budget_job(runtime: JobRuntime) -> AlertJob:
    return CheckBudgetAlertsUseCase(
        runtime.orchestrator(),
        runtime.budgets,
        runtime.transactions,
        policy=runtime.policy(),
        timezone_name=runtime.settings.scheduler_timezone,
    )


def _milestone_job(runtime: JobRuntime) -> AlertJob:
    return CheckMilestonesUseCase(
        runtime.orchestrator(),
        runtime.achievements,
        runtime.transactions,
        policy=runtime.policy(),
    )


def _price_job(runtime: JobRuntime) -> AlertJob:
    return CheckPriceDropsUseCase(
        runtime.orchestrator(),
        runtime.price_tracking,
        runtime.price_feed,
        policy=runtime.policy(),
    )


def _coaching_job(runtime: JobRuntime) -> AlertJob:
    return SendCoachingTipsUseCase(runtime.orchestrator())


JOB_FACTORIES: dict[str, Callable[[JobRuntime], AlertJob]] = {
    "coaching_tip": _coaching_job,
    "budget_alert": _budget_job,
    "price_alert": _price_job,
    "milestone": _milestone_job,
}


def build_alert_job(name: str, runtime: JobRuntime) -> AlertJob:
    """Build the alert job registered under name.

    Raises:
        UnknownJobError: If no job has that name.
    """
    factory = JOB_FACTORIES.get(name)
    if factory is None:
        raise UnknownJobError(name)
    return factory(runtime)


async def run_alert_job(name: str, runtime: JobRuntime) -> RunSummary:
    """Build and run one alert job against the given runtime."""
    job = build_alert_job(name, runtime)
    return await job.execute()
