"""Firebase Cloud Messaging client for push notification delivery.

FCM HTTP v1 API documentation:
https://firebase.google.com/docs/reference/fcm/rest/v1/projects.messages/send

Messages carry a notification block (title/body), a string-only data
block, an Android channel/colour per notification type and an APNs
payload with the default sound and a badge.
"""

import logging
from typing import Any, Optional

import httpx

from app.spend_alerts.application.interfaces.notification_dispatcher import (
    NotificationDispatcher,
)
from app.spend_alerts.domain.services.message_templates import PushMessage

logger = logging.getLogger(__name__)

FCM_BASE_URL = "https://fcm.googleapis.com"

# Default timeout for HTTP requests
DEFAULT_TIMEOUT_SECONDS = 10.0


def build_fcm_message(token: str, message: PushMessage) -> dict[str, Any]:
    """Build the FCM v1 message body for one device.

    Args:
        token: Device registration token.
        message: Rendered notification.

    Returns:
        The JSON body expected by messages:send.
    """
    style = message.style
    return {
        "message": {
            "token": token,
            "notification": {
                "title": message.title,
                "body": message.body,
            },
            "data": {k: str(v) for k, v in message.data.items()},
            "android": {
                "notification": {
                    "channel_id": style.channel_id,
                    "icon": "ic_launcher",
                    "color": style.color,
                }
            },
            "apns": {
                "payload": {
                    "aps": {
                        "sound": "default",
                        "badge": 1,
                    }
                }
            },
        }
    }


class FcmClient(NotificationDispatcher):
    """FCM HTTP v1 client implementing the NotificationDispatcher interface.

    Without a project id and access token the client runs in dev mode: it
    logs each message and reports success without any network call.

    Attributes:
        _client: httpx AsyncClient for making HTTP requests.
        _project_id: Firebase project the messages are sent through.
        _access_token: OAuth2 bearer token for the FCM API.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        access_token: Optional[str] = None,
        base_url: str = FCM_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the FCM client.

        Args:
            project_id: Firebase project id.
            access_token: OAuth2 access token with the firebase.messaging scope.
            base_url: FCM API base URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._project_id = project_id
        self._access_token = access_token
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def dev_mode(self) -> bool:
        """True when credentials are missing and sends are only logged."""
        return not (self._project_id and self._access_token)

    async def send(self, token: str, message: PushMessage) -> bool:
        """Send one message to one device.

        Args:
            token: Device registration token.
            message: Rendered notification.

        Returns:
            True if FCM accepted the message (or dev mode logged it).
        """
        if self.dev_mode:
            logger.info(
                f"[DEV MODE] Push to user {message.user_id}:\n"
                f"  Type: {message.type.value}\n"
                f"  Title: {message.title}\n"
                f"  Body: {message.body}"
            )
            return True

        path = f"/v1/projects/{self._project_id}/messages:send"
        try:
            response = await self._client.post(
                path,
                headers={"Authorization": f"Bearer {self._access_token}"},
                json=build_fcm_message(token, message),
            )
        except httpx.HTTPError as e:
            logger.error(f"FCM request failed for user {message.user_id}: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"FCM error: {response.status_code} - {response.text}")
            return False

        logger.debug(f"FCM accepted {message.type.value} for user {message.user_id}")
        return True

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "FcmClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
