"""Tests for the notification audit trail API router.

Tests GET /api/users/{user_id}/notifications.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.spend_alerts.application.dto.notification_dto import (
    NotificationDTO,
    NotificationListDTO,
)
from app.spend_alerts.application.exceptions import StoreUnavailableError
from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.infrastructure.db.session import get_session_factory
from app.spend_alerts.presentation.api.notifications import router

USE_CASE = "app.spend_alerts.presentation.api.notifications.GetUserNotificationsUseCase"


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with the notifications router."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_session_factory] = lambda: MagicMock()
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def notification_page() -> NotificationListDTO:
    """One page holding a single budget alert."""
    return NotificationListDTO(
        notifications=[
            NotificationDTO(
                id=11,
                user_id="u1",
                type=NotificationType.BUDGET_ALERT,
                title="💸 Budget Exceeded!",
                body="You've overspent in groceries by $10.00. Current: $510.00 / $500.00",
                timestamp=datetime(2024, 3, 15, 14, 0, tzinfo=timezone.utc),
                data={"category": "groceries", "alert_level": "overage_alert_sent"},
            )
        ],
        total=1,
        page=1,
        page_size=20,
    )


class TestListUserNotifications:
    """Tests for GET /api/users/{user_id}/notifications."""

    def test_list_notifications_success(
        self, client: TestClient, notification_page: NotificationListDTO
    ) -> None:
        """Test a page of notifications is returned."""
        with patch(USE_CASE) as mock_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.return_value = notification_page
            mock_class.return_value = mock_use_case

            response = client.get("/api/users/u1/notifications")

            assert response.status_code == 200
            data = response.json()
            assert data["total"] == 1
            assert data["notifications"][0]["type"] == "budget_alert"
            assert data["notifications"][0]["data"]["category"] == "groceries"
            mock_use_case.execute.assert_called_once_with("u1", page=1, page_size=20)

    def test_pagination_parameters_forwarded(
        self, client: TestClient, notification_page: NotificationListDTO
    ) -> None:
        """Test page and page_size reach the use case."""
        with patch(USE_CASE) as mock_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.return_value = notification_page
            mock_class.return_value = mock_use_case

            client.get("/api/users/u1/notifications?page=3&page_size=5")

            mock_use_case.execute.assert_called_once_with("u1", page=3, page_size=5)

    @pytest.mark.parametrize("query", ["page=0", "page_size=0", "page_size=101"])
    def test_invalid_pagination_rejected(self, client: TestClient, query: str) -> None:
        """Test 422 for out-of-range paging."""
        response = client.get(f"/api/users/u1/notifications?{query}")

        assert response.status_code == 422

    def test_store_unavailable_returns_503(self, client: TestClient) -> None:
        """Test 503 when the database cannot be reached."""
        with patch(USE_CASE) as mock_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.side_effect = StoreUnavailableError("list notifications")
            mock_class.return_value = mock_use_case

            response = client.get("/api/users/u1/notifications")

            assert response.status_code == 503
            assert "unavailable" in response.json()["detail"].lower()
