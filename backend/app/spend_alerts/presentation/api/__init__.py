# FastAPI routers - health, notification audit trail
from app.spend_alerts.presentation.api import health, notifications

__all__ = ["health", "notifications"]
