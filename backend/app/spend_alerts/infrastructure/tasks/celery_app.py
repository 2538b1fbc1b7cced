"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging as celery_setup_logging

from app.core.config import get_settings
from app.core.logging import configure_worker_logging

settings = get_settings()

TASKS_MODULE = "app.spend_alerts.infrastructure.tasks"

celery_app = Celery(
    "spend_alerts",
    broker=str(settings.celery_broker_url),
    backend=str(settings.celery_result_backend),
    include=[
        f"{TASKS_MODULE}.alert_tasks",
        f"{TASKS_MODULE}.maintenance_tasks",
    ],
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.scheduler_timezone,  # crontab entries are local to this zone
    enable_utc=True,
    task_track_started=True,
    task_time_limit=settings.task_time_limit_seconds,
    worker_prefetch_multiplier=1,  # Fair task distribution
    # Beat schedule for periodic tasks
    beat_schedule={
        "weekly-coaching-tips": {
            "task": f"{TASKS_MODULE}.alert_tasks.send_weekly_coaching_tips",
            "schedule": crontab(minute=0, hour=9, day_of_week="mon"),
        },
        "daily-budget-alerts": {
            "task": f"{TASKS_MODULE}.alert_tasks.check_daily_budget_alerts",
            "schedule": crontab(minute=0, hour=9),
        },
        "monthly-budget-reset": {
            "task": f"{TASKS_MODULE}.maintenance_tasks.reset_monthly_budget_alerts",
            "schedule": crontab(minute=0, hour=0, day_of_month=1),
        },
        "price-drop-alerts": {
            "task": f"{TASKS_MODULE}.alert_tasks.check_price_drop_alerts",
            "schedule": crontab(minute=0, hour="9,18"),
        },
        "daily-milestones": {
            "task": f"{TASKS_MODULE}.alert_tasks.check_milestone_achievements",
            "schedule": crontab(minute=0, hour=20),
        },
        "weekly-notification-cleanup": {
            "task": f"{TASKS_MODULE}.maintenance_tasks.cleanup_old_notifications",
            "schedule": crontab(minute=0, hour=2, day_of_week="sun"),
        },
    },
)

# Use the application's log format in workers and beat
celery_setup_logging.connect(configure_worker_logging, weak=False)
