"""Tests for the health and readiness endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.spend_alerts.infrastructure.db.session import get_session_factory
from app.spend_alerts.presentation.api.health import router

PING = "app.spend_alerts.presentation.api.health.ping"


@pytest.fixture
def client() -> TestClient:
    """Create a test client with the health router."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_session_factory] = lambda: MagicMock()
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ready_when_database_answers(client: TestClient) -> None:
    with patch(PING, new=AsyncMock(return_value=True)):
        response = client.get("/api/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "ok"}


def test_not_ready_when_database_unreachable(client: TestClient) -> None:
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))
    with patch(PING, new=AsyncMock(side_effect=error)):
        response = client.get("/api/ready")

    assert response.status_code == 503
    assert response.json()["database"] == "unreachable"
