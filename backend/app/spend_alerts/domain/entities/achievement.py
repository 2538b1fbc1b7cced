"""Achievement entity marking a reached spending milestone."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

SPENDING_MILESTONE = "spending_milestone"


def achievement_key(user_id: str, milestone: int) -> str:
    """Build the unique key for a (user, milestone) achievement."""
    return f"{user_id}_spending_{milestone}"


@dataclass
class Achievement:
    """Durable marker that a cumulative milestone was reached and notified.

    Achievements never reset: the existence of the record for a key is
    what suppresses a second notification.

    Attributes:
        user_id: The user who reached the milestone.
        milestone: Milestone value in dollars.
        total_spending: Cumulative spending when the milestone was recorded.
        type: Achievement type (only spending milestones exist today).
        achieved_at: When the achievement was recorded.
    """

    user_id: str
    milestone: int
    total_spending: Decimal
    type: str = SPENDING_MILESTONE
    achieved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> str:
        return achievement_key(self.user_id, self.milestone)
