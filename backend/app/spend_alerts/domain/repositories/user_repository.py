"""Abstract repository interface for UserProfile entities."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.user import NotificationPreference, UserProfile


class UserRepository(ABC):
    """Abstract repository for reading user notification profiles."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Retrieve a user profile by its identifier.

        Args:
            user_id: The user identifier.

        Returns:
            The UserProfile if found, None otherwise.
        """
        pass

    @abstractmethod
    async def get_eligible(
        self, preference: NotificationPreference
    ) -> List[UserProfile]:
        """Retrieve users who opted in to a kind of notification.

        A user is eligible when the master `enabled` switch and the given
        preference are both on. Passing NotificationPreference.ENABLED
        filters on the master switch only. Users without a push token are
        still returned; the caller decides what to do with them.

        Args:
            preference: The job-specific preference to filter on.

        Returns:
            List of eligible UserProfile entities.

        Raises:
            StoreUnavailableError: If the store cannot be queried.
        """
        pass
