"""Tests for CleanupNotificationsUseCase."""

from datetime import datetime, timedelta

import pytest

from app.spend_alerts.application.use_cases.cleanup_notifications import (
    CleanupNotificationsUseCase,
)
from app.spend_alerts.domain.entities.notification import NotificationRecord, NotificationType


def record(user_id: str, timestamp: datetime, title: str = "t") -> NotificationRecord:
    return NotificationRecord(
        id=None,
        user_id=user_id,
        type=NotificationType.BUDGET_ALERT,
        title=title,
        body="b",
        data={"category": "groceries"},
        timestamp=timestamp,
    )


class TestCleanupNotifications:
    """Tests for the retention sweep."""

    @pytest.mark.asyncio
    async def test_deletes_only_records_past_the_horizon(self, repos, store, now) -> None:
        await repos.notifications.append(record("u1", now - timedelta(days=31)))
        await repos.notifications.append(record("u1", now - timedelta(days=45)))
        await repos.notifications.append(record("u1", now - timedelta(days=29)))
        await repos.notifications.append(record("u2", now))
        use_case = CleanupNotificationsUseCase(repos.notifications, clock=lambda: now)

        deleted = await use_case.execute(horizon_days=30)

        assert deleted == 2
        assert all(n.timestamp >= now - timedelta(days=30) for n in store.notifications)
        assert len(store.notifications) == 2

    @pytest.mark.asyncio
    async def test_second_sweep_deletes_nothing(self, repos, now) -> None:
        await repos.notifications.append(record("u1", now - timedelta(days=40)))
        use_case = CleanupNotificationsUseCase(repos.notifications, clock=lambda: now)

        assert await use_case.execute() == 1
        assert await use_case.execute() == 0

    @pytest.mark.asyncio
    async def test_negative_horizon_is_rejected(self, repos) -> None:
        with pytest.raises(ValueError):
            await CleanupNotificationsUseCase(repos.notifications).execute(horizon_days=-1)
