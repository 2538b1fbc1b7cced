"""Celery tasks for the scheduled alert jobs."""

import asyncio
import logging
from typing import Any

from app.spend_alerts.infrastructure.tasks.celery_app import celery_app
from app.spend_alerts.infrastructure.tasks.runtime import job_runtime, run_alert_job

logger = logging.getLogger(__name__)


async def _run_job_async(name: str) -> dict[str, Any]:
    """Async implementation shared by the alert tasks.

    Returns:
        The run summary as a JSON-serializable dict.
    """
    async with job_runtime() as runtime:
        summary = await run_alert_job(name, runtime)
    return summary.model_dump(mode="json")


def _run_job(task_name: str, job_name: str) -> dict[str, Any]:
    logger.info(f"Starting {task_name} task")
    try:
        return asyncio.run(_run_job_async(job_name))
    except Exception as e:
        logger.exception(f"{task_name} failed: {e}")
        raise


@celery_app.task(
    bind=True,
    name="app.spend_alerts.infrastructure.tasks.alert_tasks.send_weekly_coaching_tips",
)
def send_weekly_coaching_tips(self) -> dict:
    """Send one randomly chosen coaching tip to every opted-in user.

    Runs Monday mornings. Users need notifications and spending
    insights enabled, and a registered device.

    Returns:
        Summary of the run.
    """
    return _run_job("send_weekly_coaching_tips", "coaching_tip")


@celery_app.task(
    bind=True,
    name="app.spend_alerts.infrastructure.tasks.alert_tasks.check_daily_budget_alerts",
)
def check_daily_budget_alerts(self) -> dict:
    """Check this month's budgets against the 75/90/100% bands.

    This task runs daily and:
    1. Loads users with budget alerts enabled
    2. Sums each budget's category spending for the current month
    3. Claims the most severe band crossed unless it was already notified
    4. Sends the notification, or releases the claim if sending failed

    Returns:
        Summary of the run.
    """
    return _run_job("check_daily_budget_alerts", "budget_alert")


@celery_app.task(
    bind=True,
    name="app.spend_alerts.infrastructure.tasks.alert_tasks.check_price_drop_alerts",
)
def check_price_drop_alerts(self) -> dict:
    """Check active tracked items for drops to their target price.

    Returns:
        Summary of the run.
    """
    return _run_job("check_price_drop_alerts", "price_alert")


@celery_app.task(
    bind=True,
    name="app.spend_alerts.infrastructure.tasks.alert_tasks.check_milestone_achievements",
)
def check_milestone_achievements(self) -> dict:
    """Record and announce lifetime spending milestones.

    Returns:
        Summary of the run.
    """
    return _run_job("check_milestone_achievements", "milestone")
