"""Tests for the FCM push client."""

import json

import httpx
import pytest

from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.domain.services.message_templates import PushMessage
from app.spend_alerts.infrastructure.external.fcm_client import FcmClient, build_fcm_message


@pytest.fixture
def message() -> PushMessage:
    """A rendered budget alert."""
    return PushMessage(
        type=NotificationType.BUDGET_ALERT,
        user_id="u1",
        title="💸 Budget Exceeded!",
        body="You've overspent in groceries by $10.00. Current: $510.00 / $500.00",
        data={"type": "budget_alert", "user_id": "u1", "category": "groceries"},
    )


class TestBuildFcmMessage:
    """Tests for the FCM v1 message body."""

    def test_message_shape(self, message: PushMessage) -> None:
        body = build_fcm_message("device-token", message)["message"]

        assert body["token"] == "device-token"
        assert body["notification"] == {"title": message.title, "body": message.body}
        assert body["data"]["category"] == "groceries"
        assert body["android"]["notification"]["channel_id"] == "budget_alerts"
        assert body["android"]["notification"]["color"] == "#FF9800"
        assert body["apns"]["payload"]["aps"] == {"sound": "default", "badge": 1}


class TestFcmClient:
    """Tests for FcmClient.send."""

    @pytest.mark.asyncio
    async def test_posts_to_messages_send(self, message: PushMessage) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"name": "projects/demo/messages/1"})

        async with FcmClient(
            project_id="demo",
            access_token="secret",
            transport=httpx.MockTransport(handler),
        ) as client:
            sent = await client.send("device-token", message)

        assert sent is True
        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/projects/demo/messages:send"
        assert request.headers["Authorization"] == "Bearer secret"
        assert json.loads(request.content)["message"]["token"] == "device-token"

    @pytest.mark.asyncio
    async def test_non_200_is_failure(self, message: PushMessage) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(404, json={"error": {"status": "NOT_FOUND"}})
        )

        async with FcmClient("demo", "secret", transport=transport) as client:
            assert await client.send("stale-token", message) is False

    @pytest.mark.asyncio
    async def test_transport_error_is_failure(self, message: PushMessage) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with FcmClient("demo", "secret", transport=httpx.MockTransport(handler)) as client:
            assert await client.send("device-token", message) is False

    @pytest.mark.asyncio
    async def test_dev_mode_logs_without_network(self, message: PushMessage) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("dev mode must not call FCM")

        async with FcmClient(transport=httpx.MockTransport(handler)) as client:
            assert client.dev_mode is True
            assert await client.send("device-token", message) is True
