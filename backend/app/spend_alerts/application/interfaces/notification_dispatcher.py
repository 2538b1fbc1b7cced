"""Notification dispatcher interface for push delivery."""

from abc import ABC, abstractmethod

from app.spend_alerts.domain.services.message_templates import PushMessage


class NotificationDispatcher(ABC):
    """Abstract base class for push notification transports.

    Delivery is best-effort: implementations report failure by returning
    False and must not raise for transport errors. The caller decides
    whether a failed send is retried (the alert engine retries on the next
    scheduled run by releasing its claim).
    """

    @abstractmethod
    async def send(self, token: str, message: PushMessage) -> bool:
        """Deliver a rendered message to one device.

        Args:
            token: Device registration token.
            message: The rendered notification.

        Returns:
            True if the transport accepted the message.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
