from app.spend_alerts.application.interfaces.notification_dispatcher import (
    NotificationDispatcher,
)
from app.spend_alerts.application.interfaces.price_feed import PriceFeed

__all__ = [
    "NotificationDispatcher",
    "PriceFeed",
]
