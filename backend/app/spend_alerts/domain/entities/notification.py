"""NotificationRecord entity: the audit trail of delivered notifications."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class NotificationType(Enum):
    """Job kinds, also used as the `type` field of push payloads."""

    COACHING_TIP = "coaching_tip"
    BUDGET_ALERT = "budget_alert"
    PRICE_ALERT = "price_alert"
    MILESTONE = "milestone"


@dataclass
class NotificationRecord:
    """Append-only log entry written after a successful dispatch.

    Records are never mutated by the alert engine; the retention sweep
    deletes them in bulk once they age past the horizon.

    Attributes:
        id: Database identifier (None for unsaved entities).
        user_id: Recipient.
        type: Kind of notification sent.
        title: Rendered title.
        body: Rendered body.
        data: Structured fields describing the triggering condition.
        read: Whether the user has opened it in the app.
        timestamp: When the notification was recorded.
    """

    id: Optional[int]
    user_id: str
    type: NotificationType
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    read: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
