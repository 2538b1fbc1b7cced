"""Run orchestration shared by every alert job.

A run lists the users eligible for one job, fans out over them with
bounded concurrency, and lets the job evaluate each user. Every
notification goes through `deliver`, which enforces the ordering that
keeps notifications at-most-once:

1. claim the crossing with a conditional store write,
2. dispatch only if the claim was won,
3. append the audit record on success, or release the claim on failure
   so the next scheduled run retries it.

Failures are isolated per user and per entity. Only listing the eligible
users can abort a run.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Optional

from app.spend_alerts.application.dto.run_summary_dto import RunSummary
from app.spend_alerts.application.exceptions import MalformedEntityError
from app.spend_alerts.application.interfaces.notification_dispatcher import (
    NotificationDispatcher,
)
from app.spend_alerts.domain.entities.notification import NotificationRecord, NotificationType
from app.spend_alerts.domain.entities.user import NotificationPreference, UserProfile
from app.spend_alerts.domain.repositories.notification_repository import (
    NotificationRepository,
)
from app.spend_alerts.domain.repositories.user_repository import UserRepository
from app.spend_alerts.domain.services.message_templates import PushMessage

logger = logging.getLogger(__name__)

ClaimFn = Callable[[], Awaitable[bool]]


class AlertJob(ABC):
    """One kind of scheduled alert evaluation.

    Subclasses declare which notification type they emit and which user
    preference gates them, and implement the per-user evaluation.
    """

    notification_type: NotificationType
    preference: NotificationPreference

    @property
    def name(self) -> str:
        return self.notification_type.value

    @abstractmethod
    async def execute(self) -> RunSummary:
        """Run the job over every eligible user."""
        ...

    @abstractmethod
    async def process_user(self, user: UserProfile, summary: RunSummary) -> None:
        """Evaluate one user and deliver any notifications due.

        Args:
            user: An eligible user with a registered device.
            summary: The run's counters.
        """
        ...


class RunOrchestrator:
    """Drives alert jobs over all eligible users.

    The orchestrator holds no state between runs; everything it knows
    about prior runs comes from the store.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        dispatcher: NotificationDispatcher,
        max_concurrency: int = 10,
    ) -> None:
        """Initialize the orchestrator with its collaborators.

        Args:
            user_repository: Source of eligible users.
            notification_repository: Audit trail writer.
            dispatcher: Push transport.
            max_concurrency: Maximum users processed at once.
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._user_repository = user_repository
        self._notification_repository = notification_repository
        self._dispatcher = dispatcher
        self._max_concurrency = max_concurrency

    async def run(self, job: AlertJob) -> RunSummary:
        """Run one job over every eligible user.

        Args:
            job: The alert job to run.

        Returns:
            Aggregated counters for the run.

        Raises:
            StoreUnavailableError: If the eligible users cannot be listed.
        """
        summary = RunSummary(job=job.name)

        users = await self._user_repository.get_eligible(job.preference)
        logger.info(f"Running {job.name} for {len(users)} eligible users")

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def process(user: UserProfile) -> None:
            if not user.has_device:
                logger.debug(f"Skipping user {user.id}: no device token registered")
                summary.skipped += 1
                return
            async with semaphore:
                with self.isolated(summary, f"user {user.id}"):
                    await job.process_user(user, summary)

        await asyncio.gather(*(process(user) for user in users))

        summary.finish()
        logger.info(
            f"{job.name} complete: {summary.attempted} attempted, {summary.sent} sent, "
            f"{summary.failed} failed, {summary.skipped} skipped, "
            f"{summary.race_lost} already claimed"
        )
        return summary

    @contextmanager
    def isolated(self, summary: RunSummary, label: str) -> Iterator[None]:
        """Contain a failure to the user or entity named by label.

        Malformed entities are skipped with a warning; any other error is
        logged and counted as failed. Nothing propagates to the run.
        """
        try:
            yield
        except MalformedEntityError as e:
            logger.warning(f"Skipping {label}: {e.message}")
            summary.skipped += 1
        except Exception as e:
            logger.exception(f"Error processing {label}: {e}")
            summary.record_error(f"Error processing {label}: {e}")

    async def deliver(
        self,
        user: UserProfile,
        message: PushMessage,
        summary: RunSummary,
        claim: Optional[ClaimFn] = None,
        release: Optional[ClaimFn] = None,
    ) -> bool:
        """Claim, dispatch and record one notification.

        Args:
            user: Recipient (must have a device token).
            message: The rendered notification.
            summary: The run's counters.
            claim: Conditional write that returns True only for the single
                run allowed to notify. None means the notification is not
                deduplicated (coaching tips).
            release: Undoes the claim after a failed dispatch.

        Returns:
            True if the notification was delivered.
        """
        if claim is not None and not await claim():
            logger.debug(
                f"{message.type.value} for user {user.id} already claimed by another run"
            )
            summary.race_lost += 1
            return False

        summary.attempted += 1
        try:
            delivered = await self._dispatcher.send(user.fcm_token or "", message)
        except Exception as e:
            logger.exception(f"Dispatcher raised for user {user.id}: {e}")
            delivered = False

        if not delivered:
            summary.failed += 1
            logger.error(f"Failed to send {message.type.value} to user {user.id}")
            if release is not None:
                await self._release(user, message, release)
            return False

        summary.sent += 1
        try:
            await self._notification_repository.append(
                NotificationRecord(
                    id=None,
                    user_id=user.id,
                    type=message.type,
                    title=message.title,
                    body=message.body,
                    data=message.audit_data(),
                )
            )
        except Exception as e:
            # The push is out and the claim stays set; only the log entry is missing.
            logger.exception(f"Sent {message.type.value} to {user.id} but audit append failed")
            summary.errors.append(f"Audit record missing for user {user.id}: {e}")

        logger.info(f"{message.type.value} sent to user {user.id}: {message.title}")
        return True

    async def _release(self, user: UserProfile, message: PushMessage, release: ClaimFn) -> None:
        try:
            released = await release()
        except Exception as e:
            logger.exception(f"Could not release claim for user {user.id}: {e}")
            return
        if not released:
            logger.warning(
                f"Claim for {message.type.value} (user {user.id}) was already released"
            )
