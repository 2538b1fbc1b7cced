"""Alert policy domain service for threshold-crossing evaluation.

Three rules are implemented, each a pure function of its inputs:
- Budget bands: the most severe band that is met fires unless it is
  already flagged; lower bands are superseded within the period.
- Spending milestones: every milestone at or below the total that has no
  achievement fires, since milestones are cumulative checkpoints.
- Price drops: fire when the current price is at or below the target and
  strictly below the last known price.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from app.spend_alerts.domain.entities.budget import Budget
from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem
from app.spend_alerts.domain.services.threshold_registry import (
    BUDGET_BANDS,
    SPENDING_MILESTONES,
    BudgetBand,
    normalize_milestones,
    percentage_used,
)


@dataclass(frozen=True)
class BudgetCrossing:
    """A budget band newly met in the current period."""

    budget: Budget
    band: BudgetBand
    current_spending: Decimal
    percentage_used: Decimal

    @property
    def overage(self) -> Decimal:
        return self.current_spending - self.budget.amount

    @property
    def remaining(self) -> Decimal:
        return self.budget.amount - self.current_spending


@dataclass(frozen=True)
class MilestoneCrossing:
    """A cumulative spending milestone reached without an achievement."""

    user_id: str
    milestone: int
    total_spending: Decimal


@dataclass(frozen=True)
class PriceDropCrossing:
    """A tracked item whose price fell to or below its target."""

    item: TrackedPriceItem
    old_price: Decimal
    new_price: Decimal


class AlertPolicy:
    """Domain service deciding which thresholds were newly crossed.

    This service has no infrastructure dependencies and performs no I/O.
    Persisting flags and achievements is the orchestrator's job.
    """

    def __init__(
        self,
        budget_bands: Iterable[BudgetBand] = BUDGET_BANDS,
        milestones: Iterable[int] = SPENDING_MILESTONES,
    ) -> None:
        """Initialize the policy with its threshold registry.

        Args:
            budget_bands: Budget bands; evaluated in descending severity.
            milestones: Spending milestone values in dollars.
        """
        self._bands = tuple(sorted(budget_bands, key=lambda b: b.severity, reverse=True))
        self._milestones = normalize_milestones(tuple(milestones))

    @property
    def milestones(self) -> tuple[int, ...]:
        return self._milestones

    def evaluate_budget(
        self, budget: Budget, current_spending: Decimal
    ) -> Optional[BudgetCrossing]:
        """Find the band that should fire for a budget in this pass.

        Bands are checked from most to least severe and the first band
        whose threshold is met decides: it fires if its flag is unset,
        otherwise nothing fires. Lower bands are superseded either way, so
        a budget that already got the overage alert does not get the 90%
        alert afterwards.

        Args:
            budget: The budget with its current flags.
            current_spending: Spending in the budget's category this period.

        Returns:
            The crossing to notify, or None if nothing is due or the
            budget limit is not positive.
        """
        used = percentage_used(current_spending, budget.amount)
        if used is None:
            return None

        for band in self._bands:
            if used < band.threshold_pct:
                continue
            if budget.flag_is_set(band.flag):
                return None
            return BudgetCrossing(
                budget=budget,
                band=band,
                current_spending=current_spending,
                percentage_used=used,
            )
        return None

    def evaluate_milestones(
        self,
        user_id: str,
        total_spending: Decimal,
        achieved: Iterable[int],
    ) -> list[MilestoneCrossing]:
        """Find every milestone reached that has no achievement yet.

        Args:
            user_id: The user whose total is evaluated.
            total_spending: Lifetime expense total.
            achieved: Milestone values that already have an achievement.

        Returns:
            Crossings in ascending milestone order.
        """
        already = set(achieved)
        return [
            MilestoneCrossing(user_id=user_id, milestone=m, total_spending=total_spending)
            for m in self._milestones
            if total_spending >= m and m not in already
        ]

    def evaluate_price_drop(
        self, item: TrackedPriceItem, current_price: Decimal
    ) -> Optional[PriceDropCrossing]:
        """Check whether a tracked item dropped to its target.

        Args:
            item: The tracked item with its target and last known price.
            current_price: Freshly observed price.

        Returns:
            A crossing if current <= target and current < last known.
        """
        if current_price <= item.target_price and current_price < item.last_known_price:
            return PriceDropCrossing(
                item=item,
                old_price=item.last_known_price,
                new_price=current_price,
            )
        return None
