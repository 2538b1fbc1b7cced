"""Static thresholds the alert engine evaluates against.

Two shapes are registered here:
- Percentage bands for budgets, ordered most severe first.
- Absolute spending milestones, ordered ascending.

The weekly coaching tips live here too since they are fixed content
rather than computed values.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from app.spend_alerts.domain.entities.budget import BudgetAlertFlag


@dataclass(frozen=True)
class BudgetBand:
    """A budget usage band and the copy sent when it is crossed.

    Attributes:
        threshold_pct: Usage percentage at or above which the band is met.
        flag: Budget flag recording the band was notified this period.
        severity: Higher values supersede lower ones within a period.
        title: Notification title.
        body_template: str.format template; receives category, spending,
            limit, overage and remaining (all pre-formatted as dollars).
    """

    threshold_pct: Decimal
    flag: BudgetAlertFlag
    severity: int
    title: str
    body_template: str


@dataclass(frozen=True)
class CoachingTip:
    title: str
    body: str


BUDGET_BANDS: tuple[BudgetBand, ...] = (
    BudgetBand(
        threshold_pct=Decimal("100"),
        flag=BudgetAlertFlag.OVERAGE,
        severity=3,
        title="💸 Budget Exceeded!",
        body_template=(
            "You've overspent in {category} by {overage}. "
            "Current: {spending} / {limit}"
        ),
    ),
    BudgetBand(
        threshold_pct=Decimal("90"),
        flag=BudgetAlertFlag.NINETY_PERCENT,
        severity=2,
        title="⚠️ Budget Alert - 90% Used",
        body_template="You've used 90% of your {category} budget. {remaining} remaining.",
    ),
    BudgetBand(
        threshold_pct=Decimal("75"),
        flag=BudgetAlertFlag.SEVENTY_FIVE_PERCENT,
        severity=1,
        title="📊 Budget Alert - 75% Used",
        body_template="You've used 75% of your {category} budget. {remaining} remaining.",
    ),
)

SPENDING_MILESTONES: tuple[int, ...] = (100, 500, 1000, 5000, 10000, 25000, 50000)

COACHING_TIPS: tuple[CoachingTip, ...] = (
    CoachingTip(
        title="💡 Weekly Tip: The 50/30/20 Rule",
        body=(
            "Try allocating 50% for needs, 30% for wants, and 20% for savings. "
            "This simple rule can transform your budget!"
        ),
    ),
    CoachingTip(
        title="💰 Save on Groceries",
        body=(
            "Planning meals for the week? Make a shopping list and stick to it. "
            "You could save 20% on your grocery bill!"
        ),
    ),
    CoachingTip(
        title="📊 Track Your Progress",
        body=(
            "You've been doing great! Check your spending trends and see how much "
            "you've improved this month."
        ),
    ),
    CoachingTip(
        title="🎯 Emergency Fund Goal",
        body=(
            "Aim to save $1,000 for emergencies first. "
            "Even $25 per week gets you there in less than a year!"
        ),
    ),
)


def percentage_used(current_spending: Decimal, budget_limit: Decimal) -> Optional[Decimal]:
    """Calculate how much of a budget has been used.

    Formula: current_spending / budget_limit * 100

    Args:
        current_spending: Spending in the period.
        budget_limit: The budget amount.

    Returns:
        The usage percentage, or None when the limit is zero or negative.
    """
    if budget_limit <= 0:
        return None
    return current_spending / budget_limit * Decimal("100")


def normalize_milestones(values: list[int] | tuple[int, ...]) -> tuple[int, ...]:
    """Deduplicate and sort configured milestone values ascending.

    Raises:
        ValueError: If any milestone is not positive.
    """
    if any(v <= 0 for v in values):
        raise ValueError("Milestones must be positive")
    return tuple(sorted(set(values)))
