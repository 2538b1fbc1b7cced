"""Use case for the notification audit trail retention sweep."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from app.spend_alerts.domain.repositories.notification_repository import (
    NotificationRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30


class CleanupNotificationsUseCase:
    """Application service deleting audit records past the retention horizon.

    Records are never mutated, so the sweep is safe to run alongside any
    alert job.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._notification_repository = notification_repository
        self._clock = clock

    async def execute(self, horizon_days: int = DEFAULT_RETENTION_DAYS) -> int:
        """Delete notifications older than now - horizon_days.

        Args:
            horizon_days: Retention horizon in days.

        Returns:
            Number of notifications deleted.

        Raises:
            ValueError: If horizon_days is negative.
        """
        if horizon_days < 0:
            raise ValueError("horizon_days cannot be negative")

        cutoff = self._clock() - timedelta(days=horizon_days)
        count = await self._notification_repository.delete_older_than(cutoff)
        logger.info(f"Deleted {count} notifications older than {cutoff.isoformat()}")
        return count
