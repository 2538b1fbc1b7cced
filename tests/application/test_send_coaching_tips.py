"""Tests for SendCoachingTipsUseCase."""

import random

import pytest

from app.spend_alerts.application.use_cases.run_orchestrator import RunOrchestrator
from app.spend_alerts.application.use_cases.send_coaching_tips import SendCoachingTipsUseCase
from app.spend_alerts.domain.entities.notification import NotificationType
from app.spend_alerts.domain.services.threshold_registry import COACHING_TIPS


@pytest.fixture
def orchestrator(repos, dispatcher) -> RunOrchestrator:
    """Create an orchestrator over the in-memory store."""
    return RunOrchestrator(repos.users, repos.notifications, dispatcher)


class TestSendCoachingTips:
    """Tests for the weekly tip broadcast."""

    def test_requires_at_least_one_tip(self, orchestrator: RunOrchestrator) -> None:
        with pytest.raises(ValueError):
            SendCoachingTipsUseCase(orchestrator, tips=())

    @pytest.mark.asyncio
    async def test_same_tip_goes_to_every_opted_in_user(
        self, store, dispatcher, orchestrator: RunOrchestrator
    ) -> None:
        store.add_user("u1")
        store.add_user("u2")
        store.add_user("u3", spending_insights=False)
        store.add_user("u4", with_device=False)

        summary = await SendCoachingTipsUseCase(orchestrator, rng=random.Random(7)).execute()

        assert summary.sent == 2
        assert summary.skipped == 1
        assert sorted(token for token, _ in dispatcher.sent) == ["token-u1", "token-u2"]
        titles = {message.title for _, message in dispatcher.sent}
        assert len(titles) == 1
        assert titles <= {tip.title for tip in COACHING_TIPS}

    @pytest.mark.asyncio
    async def test_tips_are_recorded_with_weekly_tip_category(
        self, store, orchestrator: RunOrchestrator
    ) -> None:
        store.add_user("u1")

        await SendCoachingTipsUseCase(orchestrator, rng=random.Random(1)).execute()

        record = store.notifications[0]
        assert record.type == NotificationType.COACHING_TIP
        assert record.data == {"category": "weekly_tip"}

    @pytest.mark.asyncio
    async def test_tips_are_not_deduplicated(
        self, store, dispatcher, orchestrator: RunOrchestrator
    ) -> None:
        store.add_user("u1")
        use_case = SendCoachingTipsUseCase(orchestrator, tips=COACHING_TIPS[:1])

        await use_case.execute()
        await use_case.execute()

        assert len(dispatcher.sent) == 2
