"""Tests for GetUserNotificationsUseCase."""

from datetime import datetime, timedelta

import pytest

from app.spend_alerts.application.use_cases.get_user_notifications import (
    GetUserNotificationsUseCase,
)
from app.spend_alerts.domain.entities.notification import NotificationRecord, NotificationType


def record(user_id: str, timestamp: datetime, title: str) -> NotificationRecord:
    return NotificationRecord(
        id=None,
        user_id=user_id,
        type=NotificationType.PRICE_ALERT,
        title=title,
        body="b",
        data={"item_name": "Lamp"},
        timestamp=timestamp,
    )


class TestGetUserNotifications:
    """Tests for paging through a user's audit trail."""

    @pytest.mark.asyncio
    async def test_pages_newest_first(self, repos, now) -> None:
        for i in range(5):
            await repos.notifications.append(record("u1", now - timedelta(hours=i), title=f"n{i}"))
        await repos.notifications.append(record("u2", now, title="other"))
        use_case = GetUserNotificationsUseCase(repos.notifications)

        first = await use_case.execute("u1", page=1, page_size=2)
        last = await use_case.execute("u1", page=3, page_size=2)

        assert first.total == 5
        assert [n.title for n in first.notifications] == ["n0", "n1"]
        assert [n.title for n in last.notifications] == ["n4"]
        assert last.page == 3

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, repos, now) -> None:
        await repos.notifications.append(record("u1", now, title="n0"))

        page = await GetUserNotificationsUseCase(repos.notifications).execute(
            "u1", page=4, page_size=10
        )

        assert page.notifications == []
        assert page.total == 1
