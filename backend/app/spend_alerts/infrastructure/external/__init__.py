# External clients - FCM push delivery and price feeds

from .fcm_client import FcmClient, build_fcm_message
from .http_price_feed import HttpPriceFeed
from .simulated_price_feed import SimulatedPriceFeed

__all__ = [
    "FcmClient",
    "HttpPriceFeed",
    "SimulatedPriceFeed",
    "build_fcm_message",
]
