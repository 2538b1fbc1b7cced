"""Celery tasks for the store sweepers: monthly flag reset and retention."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

from app.spend_alerts.application.use_cases.cleanup_notifications import (
    CleanupNotificationsUseCase,
)
from app.spend_alerts.application.use_cases.reset_budget_alerts import (
    ResetBudgetAlertsUseCase,
)
from app.spend_alerts.infrastructure.tasks.celery_app import celery_app
from app.spend_alerts.infrastructure.tasks.runtime import job_runtime

logger = logging.getLogger(__name__)


async def _reset_budget_alerts_async() -> dict[str, Any]:
    async with job_runtime() as runtime:
        count = await ResetBudgetAlertsUseCase(runtime.budgets).execute()
    return {
        "budgets_reset": count,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def _cleanup_notifications_async() -> dict[str, Any]:
    async with job_runtime() as runtime:
        horizon_days = runtime.settings.notification_retention_days
        count = await CleanupNotificationsUseCase(runtime.notifications).execute(horizon_days)
    return {
        "notifications_deleted": count,
        "horizon_days": horizon_days,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@celery_app.task(
    bind=True,
    name="app.spend_alerts.infrastructure.tasks.maintenance_tasks.reset_monthly_budget_alerts",
)
def reset_monthly_budget_alerts(self) -> dict:
    """Clear every budget's band flags at the start of a month.

    Returns:
        Number of budgets reset.
    """
    logger.info("Starting reset_monthly_budget_alerts task")
    try:
        return asyncio.run(_reset_budget_alerts_async())
    except Exception as e:
        logger.exception(f"reset_monthly_budget_alerts failed: {e}")
        raise


@celery_app.task(
    bind=True,
    name="app.spend_alerts.infrastructure.tasks.maintenance_tasks.cleanup_old_notifications",
)
def cleanup_old_notifications(self) -> dict:
    """Delete audit records older than the retention horizon.

    Returns:
        Number of notifications deleted.
    """
    logger.info("Starting cleanup_old_notifications task")
    try:
        return asyncio.run(_cleanup_notifications_async())
    except Exception as e:
        logger.exception(f"cleanup_old_notifications failed: {e}")
        raise
