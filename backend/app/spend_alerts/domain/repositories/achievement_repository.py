"""Abstract repository interface for Achievement entities."""

from abc import ABC, abstractmethod
from typing import Set

from ..entities.achievement import Achievement


class AchievementRepository(ABC):
    """Abstract repository for milestone achievements."""

    @abstractmethod
    async def get_milestones_for_user(self, user_id: str) -> Set[int]:
        """Return the milestone values the user already has achievements for."""
        pass

    @abstractmethod
    async def create_if_absent(self, achievement: Achievement) -> bool:
        """Create an achievement unless one exists for the same key.

        Args:
            achievement: The achievement to record.

        Returns:
            True if the record was created, False if it already existed.
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, milestone: int) -> bool:
        """Remove an achievement whose notification could not be delivered.

        Returns:
            True if a record was deleted.
        """
        pass
