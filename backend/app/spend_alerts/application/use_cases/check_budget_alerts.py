"""Use case for the daily budget usage check.

For each of a user's budgets in the current month, the spending in the
budget's category is summed and compared against the percentage bands.
At most one band fires per budget per run: the most severe one that is
met and not yet flagged.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional

from app.spend_alerts.application.dto.run_summary_dto import RunSummary
from app.spend_alerts.application.exceptions import MalformedEntityError
from app.spend_alerts.application.use_cases.run_orchestrator import AlertJob, RunOrchestrator
from app.spend_alerts.domain.entities.budget import Budget
from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.domain.entities.user import NotificationPreference, UserProfile
from app.spend_alerts.domain.repositories.budget_repository import BudgetRepository
from app.spend_alerts.domain.repositories.transaction_repository import TransactionRepository
from app.spend_alerts.domain.services.alert_policy import AlertPolicy
from app.spend_alerts.domain.services.message_templates import render_budget_alert
from app.spend_alerts.domain.value_objects.budget_period import BudgetPeriod

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CheckBudgetAlertsUseCase(AlertJob):
    """Application service for budget threshold notifications."""

    notification_type = NotificationType.BUDGET_ALERT
    preference = NotificationPreference.BUDGET_ALERTS

    def __init__(
        self,
        orchestrator: RunOrchestrator,
        budget_repository: BudgetRepository,
        transaction_repository: TransactionRepository,
        policy: Optional[AlertPolicy] = None,
        timezone_name: str = "UTC",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the use case with required dependencies.

        Args:
            orchestrator: Shared run driver.
            budget_repository: Budgets and their alert flags.
            transaction_repository: Spending aggregates.
            policy: Threshold evaluator (default bands when omitted).
            timezone_name: Timezone that decides the current month.
            clock: Returns the current instant.
        """
        self._orchestrator = orchestrator
        self._budget_repository = budget_repository
        self._transaction_repository = transaction_repository
        self._policy = policy or AlertPolicy()
        self._timezone_name = timezone_name
        self._clock = clock

    async def execute(self) -> RunSummary:
        """Run the budget check over every eligible user."""
        return await self._orchestrator.run(self)

    async def process_user(self, user: UserProfile, summary: RunSummary) -> None:
        period = BudgetPeriod.containing(self._clock(), self._timezone_name)
        budgets = await self._budget_repository.get_for_user_period(user.id, period.key)

        for budget in budgets:
            with self._orchestrator.isolated(summary, f"budget {budget.id} of user {user.id}"):
                await self._check_budget(user, budget, period, summary)

    async def _check_budget(
        self,
        user: UserProfile,
        budget: Budget,
        period: BudgetPeriod,
        summary: RunSummary,
    ) -> None:
        if not budget.is_valid_limit:
            raise MalformedEntityError("Budget", budget.id, f"limit {budget.amount} is not positive")

        start, end = period.bounds(self._timezone_name)
        spending = await self._transaction_repository.sum_expenses(
            user.id, budget.category, start, end
        )

        crossing = self._policy.evaluate_budget(budget, spending)
        if crossing is None:
            return

        budget_id = budget.id
        flag = crossing.band.flag
        logger.debug(
            f"Budget {budget_id} ({budget.category}) at {crossing.percentage_used:.1f}%: "
            f"{flag.value} due"
        )

        async def claim() -> bool:
            return await self._budget_repository.try_mark_alert_sent(budget_id, flag)

        async def release() -> bool:
            return await self._budget_repository.release_alert_flag(budget_id, flag)

        await self._orchestrator.deliver(
            user,
            render_budget_alert(crossing),
            summary,
            claim=claim,
            release=release,
        )
