"""Simulated price feed for tracked items.

There is no retailer integration yet, so each check draws the current
price uniformly between 85% and 115% of the last known price. Prices are
rounded to cents.
"""

import logging
import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from app.spend_alerts.application.interfaces.price_feed import PriceFeed
from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


class SimulatedPriceFeed(PriceFeed):
    """Random-walk PriceFeed around each item's last known price."""

    def __init__(
        self,
        low: float = 0.85,
        high: float = 1.15,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the simulation bounds.

        Args:
            low: Lowest multiplier applied to the last known price.
            high: Highest multiplier applied to the last known price.
            rng: Random source (seed it for reproducible runs).
        """
        if low <= 0 or high < low:
            raise ValueError(f"Invalid simulation range: {low}..{high}")
        self._low = low
        self._high = high
        self._rng = rng or random.Random()

    @property
    def source_name(self) -> str:
        return "simulated"

    async def current_price(self, item: TrackedPriceItem) -> Optional[Decimal]:
        factor = Decimal(str(self._rng.uniform(self._low, self._high)))
        price = (item.last_known_price * factor).quantize(_CENTS, rounding=ROUND_HALF_UP)
        logger.debug(f"Simulated price for {item.item_name}: {item.last_known_price} -> {price}")
        return price

    async def close(self) -> None:
        pass
