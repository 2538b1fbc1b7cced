"""HTTP price feed for tracked items.

Queries a price lookup service at `{base_url}/prices` with the item name
and expects a JSON body of the form {"price": "12.34"}. Any error is
logged and reported as "no price", so the item is skipped for this run.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from app.spend_alerts.application.interfaces.price_feed import PriceFeed
from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem

logger = logging.getLogger(__name__)

# Default timeout for HTTP requests
DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpPriceFeed(PriceFeed):
    """PriceFeed backed by a JSON price lookup endpoint.

    Attributes:
        _client: httpx AsyncClient for making HTTP requests.
        _base_url: Price service base URL.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the price feed client.

        Args:
            base_url: Price service base URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def source_name(self) -> str:
        return self._base_url

    async def current_price(self, item: TrackedPriceItem) -> Optional[Decimal]:
        """Look up the current price of an item by name.

        Args:
            item: The tracked item.

        Returns:
            The current price, or None if unavailable.
        """
        try:
            response = await self._client.get("/prices", params={"item": item.item_name})
            response.raise_for_status()
            data = response.json()

            price = data.get("price")
            if price is None:
                logger.warning(f"Missing price in response for {item.item_name}")
                return None
            return Decimal(str(price))

        except httpx.TimeoutException:
            logger.error(f"Timeout fetching price for {item.item_name}")
            return None
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching price for {item.item_name}: {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error fetching price for {item.item_name}: {e}")
            return None
        except (KeyError, ValueError, AttributeError, InvalidOperation) as e:
            logger.error(f"Error parsing price response for {item.item_name}: {e}")
            return None

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
