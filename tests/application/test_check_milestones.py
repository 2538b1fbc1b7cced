"""Tests for CheckMilestonesUseCase."""

import asyncio
from datetime import datetime, timezone

import pytest

from app.spend_alerts.application.use_cases.check_milestones import CheckMilestonesUseCase
from app.spend_alerts.application.use_cases.run_orchestrator import RunOrchestrator
from app.spend_alerts.domain.entities.achievement import Achievement, achievement_key
from app.spend_alerts.domain.services.alert_policy import AlertPolicy

WHEN = datetime(2024, 3, 10, tzinfo=timezone.utc)


@pytest.fixture
def use_case(repos, dispatcher) -> CheckMilestonesUseCase:
    """Create the milestone use case over the in-memory store."""
    orchestrator = RunOrchestrator(repos.users, repos.notifications, dispatcher)
    return CheckMilestonesUseCase(orchestrator, repos.achievements, repos.transactions)


class TestCheckMilestones:
    """Tests for the milestone check."""

    @pytest.mark.asyncio
    async def test_jump_fires_every_skipped_milestone(
        self, store, dispatcher, use_case: CheckMilestonesUseCase
    ) -> None:
        store.add_user("u1")
        store.add_expense("u1", "rent", "50", WHEN)
        await use_case.execute()
        store.add_expense("u1", "rent", "1150", WHEN)

        summary = await use_case.execute()

        assert summary.sent == 3
        values = sorted(int(m.data["milestone_value"]) for _, m in dispatcher.sent)
        assert values == [100, 500, 1000]
        assert set(store.achievements) == {
            achievement_key("u1", 100),
            achievement_key("u1", 500),
            achievement_key("u1", 1000),
        }
        assert store.achievements[achievement_key("u1", 500)].total_spending == 1200

    @pytest.mark.asyncio
    async def test_achieved_milestones_never_fire_again(
        self, store, dispatcher, use_case: CheckMilestonesUseCase
    ) -> None:
        store.add_user("u1")
        store.add_expense("u1", "rent", "600", WHEN)

        await use_case.execute()
        second = await use_case.execute()

        assert second.sent == 0
        assert len(dispatcher.sent) == 2

    @pytest.mark.asyncio
    async def test_income_does_not_count(
        self, store, dispatcher, use_case: CheckMilestonesUseCase
    ) -> None:
        store.add_user("u1")
        store.add_expense("u1", "salary", "5000", WHEN, type="income")

        summary = await use_case.execute()

        assert summary.sent == 0

    @pytest.mark.asyncio
    async def test_failed_dispatch_removes_achievement(
        self, store, dispatcher, use_case: CheckMilestonesUseCase
    ) -> None:
        store.add_user("u1")
        store.add_expense("u1", "rent", "150", WHEN)
        dispatcher.failing_tokens.add("token-u1")

        summary = await use_case.execute()

        assert summary.failed == 1
        assert store.achievements == {}

    @pytest.mark.asyncio
    async def test_existing_achievement_from_another_writer_wins(
        self, store, dispatcher, repos, use_case: CheckMilestonesUseCase
    ) -> None:
        store.add_user("u1")
        store.add_expense("u1", "rent", "150", WHEN)
        await repos.achievements.create_if_absent(
            Achievement(user_id="u1", milestone=100, total_spending=150)
        )

        summary = await use_case.execute()

        assert summary.sent == 0
        assert dispatcher.sent == []

    @pytest.mark.asyncio
    async def test_concurrent_runs_notify_each_milestone_once(
        self, store, repos, dispatcher
    ) -> None:
        store.add_user("u1")
        store.add_expense("u1", "rent", "700", WHEN)

        def make() -> CheckMilestonesUseCase:
            orchestrator = RunOrchestrator(repos.users, repos.notifications, dispatcher)
            return CheckMilestonesUseCase(orchestrator, repos.achievements, repos.transactions)

        first, second = await asyncio.gather(make().execute(), make().execute())

        values = sorted(m.data["milestone_value"] for _, m in dispatcher.sent)
        assert values == ["100", "500"]
        assert first.sent + second.sent == 2

    @pytest.mark.asyncio
    async def test_configured_milestones(self, store, repos, dispatcher) -> None:
        store.add_user("u1")
        store.add_expense("u1", "rent", "30", WHEN)
        orchestrator = RunOrchestrator(repos.users, repos.notifications, dispatcher)
        use_case = CheckMilestonesUseCase(
            orchestrator,
            repos.achievements,
            repos.transactions,
            policy=AlertPolicy(milestones=[25, 50]),
        )

        summary = await use_case.execute()

        assert summary.sent == 1
        assert dispatcher.sent[0][1].data["milestone_value"] == "25"
