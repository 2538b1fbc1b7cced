"""UserProfile entity carrying push-delivery details and preferences."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NotificationPreference(Enum):
    """Per-user opt-in switches that gate each job's eligible-user list.

    The master switch ENABLED is always required in addition to the
    job-specific preference.
    """

    ENABLED = "enabled"
    BUDGET_ALERTS = "budget_alerts"
    SPENDING_INSIGHTS = "spending_insights"
    PRICE_DROPS = "price_drops"


@dataclass
class NotificationSettings:
    """Notification switches stored on the user profile."""

    enabled: bool = True
    budget_alerts: bool = True
    spending_insights: bool = True
    price_drops: bool = True

    def allows(self, preference: NotificationPreference) -> bool:
        """Check the master switch and the given preference."""
        if not self.enabled:
            return False
        return bool(getattr(self, preference.value))


@dataclass
class UserProfile:
    """Domain entity representing a user who can receive push notifications.

    Attributes:
        id: Opaque user identifier.
        fcm_token: Device registration token, or None if no device is registered.
        notification_settings: The user's opt-in switches.
    """

    id: str
    fcm_token: Optional[str] = None
    notification_settings: NotificationSettings = field(default_factory=NotificationSettings)

    @property
    def has_device(self) -> bool:
        """True if a push token is registered."""
        return bool(self.fcm_token)
