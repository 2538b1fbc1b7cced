"""Use case for the twice-daily price drop check.

Each active tracked item is priced through the injected PriceFeed. A drop
fires when the price is at or below the user's target and below the last
known price. The last known price is moved to the new price before the
notification goes out, so the same price cannot fire twice, and
last_checked is stamped only once the notification was delivered.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from app.spend_alerts.application.dto.run_summary_dto import RunSummary
from app.spend_alerts.application.exceptions import (
    MalformedEntityError,
    StoreUnavailableError,
)
from app.spend_alerts.application.interfaces.price_feed import PriceFeed
from app.spend_alerts.application.use_cases.run_orchestrator import AlertJob, RunOrchestrator
from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem
from app.spend_alerts.domain.entities.user import NotificationPreference, UserProfile
from app.spend_alerts.domain.repositories.price_tracking_repository import (
    PriceTrackingRepository,
)
from app.spend_alerts.domain.services.alert_policy import AlertPolicy
from app.spend_alerts.domain.services.message_templates import render_price_drop

logger = logging.getLogger(__name__)


class CheckPriceDropsUseCase(AlertJob):
    """Application service for price drop notifications."""

    notification_type = NotificationType.PRICE_ALERT
    preference = NotificationPreference.PRICE_DROPS

    def __init__(
        self,
        orchestrator: RunOrchestrator,
        price_tracking_repository: PriceTrackingRepository,
        price_feed: PriceFeed,
        policy: Optional[AlertPolicy] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """Initialize the use case with required dependencies.

        Args:
            orchestrator: Shared run driver.
            price_tracking_repository: Tracked items and their last known prices.
            price_feed: Source of current prices.
            policy: Threshold evaluator.
            clock: Returns the current instant (stored as last_checked after a send).
        """
        self._orchestrator = orchestrator
        self._price_tracking_repository = price_tracking_repository
        self._price_feed = price_feed
        self._policy = policy or AlertPolicy()
        self._clock = clock

    async def execute(self) -> RunSummary:
        """Run the price drop check over every eligible user."""
        return await self._orchestrator.run(self)

    async def process_user(self, user: UserProfile, summary: RunSummary) -> None:
        items = await self._price_tracking_repository.get_active_for_user(user.id)
        for item in items:
            with self._orchestrator.isolated(summary, f"tracked item {item.id} of user {user.id}"):
                await self._check_item(user, item, summary)

    async def _check_item(
        self, user: UserProfile, item: TrackedPriceItem, summary: RunSummary
    ) -> None:
        current_price = await self._price_feed.current_price(item)
        if current_price is None:
            logger.debug(f"No price from {self._price_feed.source_name} for item {item.id}")
            summary.skipped += 1
            return
        if current_price < 0 or item.last_known_price < 0:
            raise MalformedEntityError("TrackedPriceItem", item.id, "negative price")

        crossing = self._policy.evaluate_price_drop(item, current_price)
        if crossing is None:
            return

        item_id = item.id
        old_price: Decimal = crossing.old_price
        new_price: Decimal = crossing.new_price

        async def claim() -> bool:
            return await self._price_tracking_repository.try_update_last_known_price(
                item_id, old_price, new_price
            )

        async def release() -> bool:
            return await self._price_tracking_repository.try_update_last_known_price(
                item_id, new_price, old_price
            )

        delivered = await self._orchestrator.deliver(
            user,
            render_price_drop(crossing),
            summary,
            claim=claim,
            release=release,
        )
        if not delivered:
            return

        try:
            await self._price_tracking_repository.mark_checked(item_id, self._clock())
        except StoreUnavailableError as e:
            # The notification is out and the price claim stands; only the stamp is missing.
            logger.error(f"Could not stamp last_checked on item {item_id}: {e.message}")
            summary.errors.append(f"last_checked missing for item {item_id}: {e.message}")
