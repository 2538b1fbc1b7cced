# Value objects - immutable domain primitives

from app.spend_alerts.domain.value_objects.budget_period import BudgetPeriod
from app.spend_alerts.domain.value_objects.money import format_plain, format_usd, to_decimal

__all__ = [
    "BudgetPeriod",
    "format_plain",
    "format_usd",
    "to_decimal",
]
