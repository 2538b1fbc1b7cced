"""TrackedPriceItem entity for a user's price watch."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class TrackedPriceItem:
    """Domain entity representing an item whose price a user is watching.

    Attributes:
        id: Database identifier (None for unsaved entities).
        user_id: Owner of the watch.
        item_name: Display name used in the notification.
        target_price: Price at or below which the user wants to hear about drops.
        last_known_price: Price last observed (and last notified about).
        active: Whether the watch is currently evaluated.
        last_checked: When a drop notification last went out.
    """

    id: Optional[int]
    user_id: str
    item_name: str
    target_price: Decimal
    last_known_price: Decimal
    active: bool = True
    last_checked: Optional[datetime] = None
