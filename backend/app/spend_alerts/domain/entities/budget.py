"""Budget entity with its per-period alert flags."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class BudgetAlertFlag(Enum):
    """Flag fields recording which band notification was sent this period.

    Values match the column names in the budgets table.
    """

    SEVENTY_FIVE_PERCENT = "seventy_five_percent_alert_sent"
    NINETY_PERCENT = "ninety_percent_alert_sent"
    OVERAGE = "overage_alert_sent"


@dataclass
class Budget:
    """Domain entity representing a monthly spending limit for one category.

    Attributes:
        id: Database identifier (None for unsaved entities).
        user_id: Owner of the budget.
        category: Transaction category the limit applies to.
        amount: The spending limit for the period.
        month: Period key ("YYYY-MM").
        seventy_five_percent_alert_sent: 75% band already notified.
        ninety_percent_alert_sent: 90% band already notified.
        overage_alert_sent: 100% band already notified.
    """

    id: Optional[int]
    user_id: str
    category: str
    amount: Decimal
    month: str
    seventy_five_percent_alert_sent: bool = False
    ninety_percent_alert_sent: bool = False
    overage_alert_sent: bool = False

    @property
    def is_valid_limit(self) -> bool:
        """A non-positive limit makes the usage percentage undefined."""
        return self.amount > 0

    def flag_is_set(self, flag: BudgetAlertFlag) -> bool:
        return bool(getattr(self, flag.value))

    def set_flag(self, flag: BudgetAlertFlag, value: bool = True) -> None:
        setattr(self, flag.value, value)

    def clear_flags(self) -> None:
        """Reset every band flag for a new period."""
        for flag in BudgetAlertFlag:
            self.set_flag(flag, False)
