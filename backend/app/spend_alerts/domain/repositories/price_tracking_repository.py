"""Abstract repository interface for TrackedPriceItem entities."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List

from ..entities.tracked_item import TrackedPriceItem


class PriceTrackingRepository(ABC):
    """Abstract repository for price watch persistence operations."""

    @abstractmethod
    async def get_active_for_user(self, user_id: str) -> List[TrackedPriceItem]:
        """Retrieve a user's active price watches.

        Args:
            user_id: Owner of the watches.

        Returns:
            List of TrackedPriceItem entities with active == True.
        """
        pass

    @abstractmethod
    async def try_update_last_known_price(
        self,
        item_id: int,
        expected_price: Decimal,
        new_price: Decimal,
    ) -> bool:
        """Replace the last known price only if it still equals expected_price.

        This is the claim for a price drop notification: once the price
        is moved to the new value, a concurrent run comparing against the
        old value loses.

        Args:
            item_id: The tracked item to update.
            expected_price: The last known price the caller evaluated against.
            new_price: The price to store.

        Returns:
            True if the update was applied.
        """
        pass

    @abstractmethod
    async def mark_checked(self, item_id: int, checked_at: datetime) -> None:
        """Stamp last_checked after a drop notification was delivered."""
        pass
