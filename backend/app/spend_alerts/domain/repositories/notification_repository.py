"""Abstract repository interface for the notification audit trail."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from ..entities.notification import NotificationRecord


class NotificationRepository(ABC):
    """Abstract repository for NotificationRecord persistence.

    Records are append-only: they are created after a successful dispatch
    and only ever removed in bulk by age.
    """

    @abstractmethod
    async def append(self, record: NotificationRecord) -> NotificationRecord:
        """Persist a new audit record.

        Returns:
            The saved record with its ID populated.
        """
        pass

    @abstractmethod
    async def get_for_user(
        self, user_id: str, limit: int = 50, offset: int = 0
    ) -> List[NotificationRecord]:
        """Retrieve a user's notifications, newest first."""
        pass

    @abstractmethod
    async def count_for_user(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every record with a timestamp strictly before cutoff.

        Args:
            cutoff: Records older than this instant are removed.

        Returns:
            Number of records deleted.
        """
        pass
