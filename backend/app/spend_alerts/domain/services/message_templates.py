"""Rendering of crossings into push notification content."""

from dataclasses import dataclass, field

from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.domain.services.alert_policy import (
    BudgetCrossing,
    MilestoneCrossing,
    PriceDropCrossing,
)
from app.spend_alerts.domain.services.threshold_registry import CoachingTip
from app.spend_alerts.domain.value_objects.money import format_plain, format_usd


@dataclass(frozen=True)
class ChannelStyle:
    """Android channel and accent colour for one notification type."""

    channel_id: str
    color: str


CHANNEL_STYLES: dict[NotificationType, ChannelStyle] = {
    NotificationType.COACHING_TIP: ChannelStyle("coaching_tips", "#4CAF50"),
    NotificationType.BUDGET_ALERT: ChannelStyle("budget_alerts", "#FF9800"),
    NotificationType.PRICE_ALERT: ChannelStyle("price_alerts", "#2196F3"),
    NotificationType.MILESTONE: ChannelStyle("milestones", "#9C27B0"),
}


@dataclass(frozen=True)
class PushMessage:
    """A rendered notification ready for the dispatcher.

    Attributes:
        type: Kind of notification.
        user_id: Recipient.
        title: Notification title.
        body: Notification body.
        data: Structured payload; every value is a string so that it can
            travel in an FCM data block.
    """

    type: NotificationType
    user_id: str
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)

    @property
    def style(self) -> ChannelStyle:
        return CHANNEL_STYLES[self.type]

    def audit_data(self) -> dict[str, str]:
        """Payload fields stored on the audit record (type and user are columns)."""
        return {k: v for k, v in self.data.items() if k not in ("type", "user_id")}


def _payload(kind: NotificationType, user_id: str, **fields: str) -> dict[str, str]:
    return {"type": kind.value, "user_id": user_id, **fields}


def render_coaching_tip(user_id: str, tip: CoachingTip) -> PushMessage:
    return PushMessage(
        type=NotificationType.COACHING_TIP,
        user_id=user_id,
        title=tip.title,
        body=tip.body,
        data=_payload(NotificationType.COACHING_TIP, user_id, category="weekly_tip"),
    )


def render_budget_alert(crossing: BudgetCrossing) -> PushMessage:
    """Render a budget band crossing.

    Example body for the overage band with a $500 limit and $510 spent:
    "You've overspent in groceries by $10.00. Current: $510.00 / $500.00"
    """
    budget = crossing.budget
    body = crossing.band.body_template.format(
        category=budget.category,
        spending=format_usd(crossing.current_spending),
        limit=format_usd(budget.amount),
        overage=format_usd(crossing.overage),
        remaining=format_usd(crossing.remaining),
    )
    return PushMessage(
        type=NotificationType.BUDGET_ALERT,
        user_id=budget.user_id,
        title=crossing.band.title,
        body=body,
        data=_payload(
            NotificationType.BUDGET_ALERT,
            budget.user_id,
            category=budget.category,
            current_spending=format_plain(crossing.current_spending),
            budget_limit=format_plain(budget.amount),
            alert_level=crossing.band.flag.value,
            action="open_budget",
        ),
    )


def render_price_drop(crossing: PriceDropCrossing) -> PushMessage:
    item = crossing.item
    return PushMessage(
        type=NotificationType.PRICE_ALERT,
        user_id=item.user_id,
        title="🏷️ Price Drop Alert!",
        body=(
            f"Great news! {item.item_name} dropped from "
            f"{format_usd(crossing.old_price)} to {format_usd(crossing.new_price)}!"
        ),
        data=_payload(
            NotificationType.PRICE_ALERT,
            item.user_id,
            item_name=item.item_name,
            old_price=format_plain(crossing.old_price),
            new_price=format_plain(crossing.new_price),
            action="open_price_alerts",
        ),
    )


def render_milestone(crossing: MilestoneCrossing) -> PushMessage:
    # Milestones are whole dollars; the copy shows them without cents.
    total = format_usd(crossing.total_spending)
    return PushMessage(
        type=NotificationType.MILESTONE,
        user_id=crossing.user_id,
        title="🎉 Milestone Achieved!",
        body=(
            f"You've reached ${crossing.milestone} in total spending! "
            f"Your current total: {total}"
        ),
        data=_payload(
            NotificationType.MILESTONE,
            crossing.user_id,
            milestone_type="spending",
            milestone_value=str(crossing.milestone),
            total_spending=format_plain(crossing.total_spending),
            action="open_achievements",
        ),
    )
