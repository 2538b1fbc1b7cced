"""Price feed interface for looking up current prices of tracked items."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem


class PriceFeed(ABC):
    """Abstract base class for price feed implementations.

    The price drop rule only needs the current price of an item; where it
    comes from (a retailer API, a cache, a simulation) is up to the
    implementation.
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this price source."""
        ...

    @abstractmethod
    async def current_price(self, item: TrackedPriceItem) -> Optional[Decimal]:
        """Fetch the current price of a tracked item.

        Args:
            item: The tracked item.

        Returns:
            The current price, or None if it could not be determined.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
