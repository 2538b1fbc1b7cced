"""Use case for the weekly coaching tip broadcast."""

import logging
import random
from collections.abc import Sequence
from typing import Optional

from app.spend_alerts.application.dto.run_summary_dto import RunSummary
from app.spend_alerts.application.use_cases.run_orchestrator import AlertJob, RunOrchestrator
from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.domain.entities.user import NotificationPreference, UserProfile
from app.spend_alerts.domain.services.message_templates import render_coaching_tip
from app.spend_alerts.domain.services.threshold_registry import COACHING_TIPS, CoachingTip

logger = logging.getLogger(__name__)


class SendCoachingTipsUseCase(AlertJob):
    """Application service sending one randomly chosen tip to opted-in users.

    The same tip goes to every user in a run. Tips are not deduplicated:
    the weekly schedule is what limits them.
    """

    notification_type = NotificationType.COACHING_TIP
    preference = NotificationPreference.SPENDING_INSIGHTS

    def __init__(
        self,
        orchestrator: RunOrchestrator,
        tips: Sequence[CoachingTip] = COACHING_TIPS,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not tips:
            raise ValueError("At least one coaching tip is required")
        self._orchestrator = orchestrator
        self._tips = tips
        self._rng = rng or random.Random()
        self._tip: CoachingTip = tips[0]

    async def execute(self) -> RunSummary:
        """Pick this week's tip and send it to every eligible user."""
        self._tip = self._rng.choice(self._tips)
        logger.info(f"Selected coaching tip: {self._tip.title}")
        return await self._orchestrator.run(self)

    async def process_user(self, user: UserProfile, summary: RunSummary) -> None:
        await self._orchestrator.deliver(user, render_coaching_tip(user.id, self._tip), summary)
