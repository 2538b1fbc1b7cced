"""Domain services - stateless business logic.

Domain services encapsulate business rules that don't naturally belong to
a single entity: threshold evaluation and notification rendering.
"""

from app.spend_alerts.domain.services.alert_policy import (
    AlertPolicy,
    BudgetCrossing,
    MilestoneCrossing,
    PriceDropCrossing,
)
from app.spend_alerts.domain.services.message_templates import PushMessage

__all__ = [
    "AlertPolicy",
    "BudgetCrossing",
    "MilestoneCrossing",
    "PriceDropCrossing",
    "PushMessage",
]
