"""Shared fixtures: an in-memory state store and a recording dispatcher.

The in-memory repositories implement the same conditional-write contract
as the SQL ones. Every call yields to the event loop first so concurrent
runs interleave, but the check and the write of a conditional primitive
happen without an await in between, like a single UPDATE statement.
"""

import asyncio
import itertools
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Set

import pytest

from app.spend_alerts.application.exceptions import StoreUnavailableError
from app.spend_alerts.application.interfaces.notification_dispatcher import (
    NotificationDispatcher,
)
from app.spend_alerts.domain.entities.achievement import Achievement
from app.spend_alerts.domain.entities.budget import Budget, BudgetAlertFlag
from app.spend_alerts.domain.entities.notification import NotificationRecord
from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem
from app.spend_alerts.domain.entities.user import (
    NotificationPreference,
    NotificationSettings,
    UserProfile,
)
from app.spend_alerts.domain.repositories import (
    AchievementRepository,
    BudgetRepository,
    NotificationRepository,
    PriceTrackingRepository,
    TransactionRepository,
    UserRepository,
)
from app.spend_alerts.domain.services.message_templates import PushMessage


class InMemoryStore:
    """Rows shared by the in-memory repositories."""

    def __init__(self) -> None:
        self.users: dict[str, UserProfile] = {}
        self.budgets: dict[int, Budget] = {}
        self.transactions: list[tuple[str, str, str, Decimal, datetime]] = []
        self.items: dict[int, TrackedPriceItem] = {}
        self.achievements: dict[str, Achievement] = {}
        self.notifications: list[NotificationRecord] = []
        self.failing: set[str] = set()
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    async def touch(self, operation: str) -> None:
        await asyncio.sleep(0)
        if operation in self.failing:
            raise StoreUnavailableError(operation, "injected failure")

    # Seeding helpers

    def add_user(
        self,
        user_id: str,
        with_device: bool = True,
        **settings: bool,
    ) -> UserProfile:
        user = UserProfile(
            id=user_id,
            fcm_token=f"token-{user_id}" if with_device else None,
            notification_settings=NotificationSettings(**settings),
        )
        self.users[user_id] = user
        return user

    def add_budget(
        self, user_id: str, category: str, amount: str, month: str, **flags: bool
    ) -> Budget:
        budget = Budget(
            id=self.next_id(),
            user_id=user_id,
            category=category,
            amount=Decimal(amount),
            month=month,
            **flags,
        )
        self.budgets[budget.id] = budget
        return budget

    def add_expense(
        self, user_id: str, category: str, amount: str, date: datetime, type: str = "expense"
    ) -> None:
        self.transactions.append((user_id, category, type, Decimal(amount), date))

    def add_item(
        self, user_id: str, item_name: str, target: str, last_known: str, active: bool = True
    ) -> TrackedPriceItem:
        item = TrackedPriceItem(
            id=self.next_id(),
            user_id=user_id,
            item_name=item_name,
            target_price=Decimal(target),
            last_known_price=Decimal(last_known),
            active=active,
        )
        self.items[item.id] = item
        return item


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        await self._store.touch("get_by_id")
        user = self._store.users.get(user_id)
        return replace(user) if user else None

    async def get_eligible(self, preference: NotificationPreference) -> List[UserProfile]:
        await self._store.touch("get_eligible")
        return [
            replace(u)
            for u in self._store.users.values()
            if u.notification_settings.allows(preference)
        ]


class InMemoryBudgetRepository(BudgetRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_for_user_period(self, user_id: str, month: str) -> List[Budget]:
        await self._store.touch("get_for_user_period")
        return [
            replace(b)
            for b in self._store.budgets.values()
            if b.user_id == user_id and b.month == month
        ]

    async def try_mark_alert_sent(self, budget_id: int, flag: BudgetAlertFlag) -> bool:
        await self._store.touch("try_mark_alert_sent")
        budget = self._store.budgets[budget_id]
        if budget.flag_is_set(flag):
            return False
        budget.set_flag(flag, True)
        return True

    async def release_alert_flag(self, budget_id: int, flag: BudgetAlertFlag) -> bool:
        await self._store.touch("release_alert_flag")
        budget = self._store.budgets[budget_id]
        if not budget.flag_is_set(flag):
            return False
        budget.set_flag(flag, False)
        return True

    async def reset_alert_flags(self) -> int:
        await self._store.touch("reset_alert_flags")
        changed = 0
        for budget in self._store.budgets.values():
            if any(budget.flag_is_set(f) for f in BudgetAlertFlag):
                budget.clear_flags()
                changed += 1
        return changed


class InMemoryTransactionRepository(TransactionRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def sum_expenses(
        self, user_id: str, category: str, start: datetime, end: datetime
    ) -> Decimal:
        await self._store.touch("sum_expenses")
        return sum(
            (
                amount
                for uid, cat, kind, amount, date in self._store.transactions
                if uid == user_id and cat == category and kind == "expense" and start <= date <= end
            ),
            Decimal("0"),
        )

    async def sum_lifetime_expenses(self, user_id: str) -> Decimal:
        await self._store.touch("sum_lifetime_expenses")
        return sum(
            (
                amount
                for uid, _cat, kind, amount, _date in self._store.transactions
                if uid == user_id and kind == "expense"
            ),
            Decimal("0"),
        )


class InMemoryPriceTrackingRepository(PriceTrackingRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_active_for_user(self, user_id: str) -> List[TrackedPriceItem]:
        await self._store.touch("get_active_for_user")
        return [
            replace(i) for i in self._store.items.values() if i.user_id == user_id and i.active
        ]

    async def try_update_last_known_price(
        self,
        item_id: int,
        expected_price: Decimal,
        new_price: Decimal,
    ) -> bool:
        await self._store.touch("try_update_last_known_price")
        item = self._store.items[item_id]
        if item.last_known_price != expected_price:
            return False
        item.last_known_price = new_price
        return True

    async def mark_checked(self, item_id: int, checked_at: datetime) -> None:
        await self._store.touch("mark_checked")
        self._store.items[item_id].last_checked = checked_at


class InMemoryAchievementRepository(AchievementRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_milestones_for_user(self, user_id: str) -> Set[int]:
        await self._store.touch("get_milestones_for_user")
        return {a.milestone for a in self._store.achievements.values() if a.user_id == user_id}

    async def create_if_absent(self, achievement: Achievement) -> bool:
        await self._store.touch("create_if_absent")
        if achievement.key in self._store.achievements:
            return False
        self._store.achievements[achievement.key] = achievement
        return True

    async def delete(self, user_id: str, milestone: int) -> bool:
        await self._store.touch("delete_achievement")
        key = Achievement(user_id=user_id, milestone=milestone, total_spending=Decimal("0")).key
        return self._store.achievements.pop(key, None) is not None


class InMemoryNotificationRepository(NotificationRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def append(self, record: NotificationRecord) -> NotificationRecord:
        await self._store.touch("append")
        saved = replace(record, id=self._store.next_id())
        self._store.notifications.append(saved)
        return saved

    async def get_for_user(
        self, user_id: str, limit: int = 50, offset: int = 0
    ) -> List[NotificationRecord]:
        await self._store.touch("get_for_user")
        records = sorted(
            (n for n in self._store.notifications if n.user_id == user_id),
            key=lambda n: n.timestamp,
            reverse=True,
        )
        return records[offset : offset + limit]

    async def count_for_user(self, user_id: str) -> int:
        await self._store.touch("count_for_user")
        return sum(1 for n in self._store.notifications if n.user_id == user_id)

    async def delete_older_than(self, cutoff: datetime) -> int:
        await self._store.touch("delete_older_than")
        keep = [n for n in self._store.notifications if n.timestamp >= cutoff]
        deleted = len(self._store.notifications) - len(keep)
        self._store.notifications = keep
        return deleted


class RecordingDispatcher(NotificationDispatcher):
    """Dispatcher that records messages instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, PushMessage]] = []
        self.failing_tokens: set[str] = set()
        self.raising_tokens: set[str] = set()
        self.closed = False

    async def send(self, token: str, message: PushMessage) -> bool:
        await asyncio.sleep(0)
        if token in self.raising_tokens:
            raise RuntimeError("transport exploded")
        if token in self.failing_tokens:
            return False
        self.sent.append((token, message))
        return True

    async def close(self) -> None:
        self.closed = True


class Repositories:
    """Bundle of in-memory repositories over one store."""

    def __init__(self, store: InMemoryStore) -> None:
        self.users = InMemoryUserRepository(store)
        self.budgets = InMemoryBudgetRepository(store)
        self.transactions = InMemoryTransactionRepository(store)
        self.price_tracking = InMemoryPriceTrackingRepository(store)
        self.achievements = InMemoryAchievementRepository(store)
        self.notifications = InMemoryNotificationRepository(store)


@pytest.fixture
def store() -> InMemoryStore:
    """Create an empty in-memory state store."""
    return InMemoryStore()


@pytest.fixture
def repos(store: InMemoryStore) -> Repositories:
    """Create in-memory repositories sharing the store."""
    return Repositories(store)


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    """Create a dispatcher that records sent messages."""
    return RecordingDispatcher()


@pytest.fixture
def now() -> datetime:
    """A fixed instant in the middle of March 2024 (UTC)."""
    return datetime(2024, 3, 15, 14, 0, tzinfo=timezone.utc)
