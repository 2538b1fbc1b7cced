"""Use case for the daily spending milestone check.

Milestones are cumulative: every milestone at or below the user's
lifetime spending that has no achievement fires in the same pass, each
with its own achievement record.
"""

import logging
from typing import Optional

from app.spend_alerts.application.dto.run_summary_dto import RunSummary
from app.spend_alerts.application.use_cases.run_orchestrator import AlertJob, RunOrchestrator
from app.spend_alerts.domain.entities.achievement import Achievement
from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.domain.entities.user import NotificationPreference, UserProfile
from app.spend_alerts.domain.repositories.achievement_repository import AchievementRepository
from app.spend_alerts.domain.repositories.transaction_repository import TransactionRepository
from app.spend_alerts.domain.services.alert_policy import AlertPolicy, MilestoneCrossing
from app.spend_alerts.domain.services.message_templates import render_milestone

logger = logging.getLogger(__name__)


class CheckMilestonesUseCase(AlertJob):
    """Application service for spending milestone notifications."""

    notification_type = NotificationType.MILESTONE
    preference = NotificationPreference.ENABLED

    def __init__(
        self,
        orchestrator: RunOrchestrator,
        achievement_repository: AchievementRepository,
        transaction_repository: TransactionRepository,
        policy: Optional[AlertPolicy] = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._achievement_repository = achievement_repository
        self._transaction_repository = transaction_repository
        self._policy = policy or AlertPolicy()

    async def execute(self) -> RunSummary:
        """Run the milestone check over every eligible user."""
        return await self._orchestrator.run(self)

    async def process_user(self, user: UserProfile, summary: RunSummary) -> None:
        total = await self._transaction_repository.sum_lifetime_expenses(user.id)
        achieved = await self._achievement_repository.get_milestones_for_user(user.id)

        crossings = self._policy.evaluate_milestones(user.id, total, achieved)
        if crossings:
            logger.debug(
                f"User {user.id} reached milestones {[c.milestone for c in crossings]} "
                f"with total {total}"
            )

        for crossing in crossings:
            with self._orchestrator.isolated(
                summary, f"milestone {crossing.milestone} of user {user.id}"
            ):
                await self._notify(user, crossing, summary)

    async def _notify(
        self, user: UserProfile, crossing: MilestoneCrossing, summary: RunSummary
    ) -> None:
        achievement = Achievement(
            user_id=user.id,
            milestone=crossing.milestone,
            total_spending=crossing.total_spending,
        )

        async def claim() -> bool:
            return await self._achievement_repository.create_if_absent(achievement)

        async def release() -> bool:
            return await self._achievement_repository.delete(user.id, crossing.milestone)

        await self._orchestrator.deliver(
            user,
            render_milestone(crossing),
            summary,
            claim=claim,
            release=release,
        )
