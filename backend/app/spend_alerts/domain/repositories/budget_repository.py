"""Abstract repository interface for Budget entities."""

from abc import ABC, abstractmethod
from typing import List

from ..entities.budget import Budget, BudgetAlertFlag


class BudgetRepository(ABC):
    """Abstract repository for Budget persistence operations.

    Flag updates go through conditional primitives so that overlapping
    evaluation runs cannot both claim the same (budget, flag) pair.
    """

    @abstractmethod
    async def get_for_user_period(self, user_id: str, month: str) -> List[Budget]:
        """Retrieve a user's budgets for one period.

        Args:
            user_id: Owner of the budgets.
            month: Period key ("YYYY-MM").

        Returns:
            List of Budget entities, possibly empty.
        """
        pass

    @abstractmethod
    async def try_mark_alert_sent(self, budget_id: int, flag: BudgetAlertFlag) -> bool:
        """Set a flag to true only if it is currently false.

        Args:
            budget_id: The budget to update.
            flag: The band flag to claim.

        Returns:
            True if this call flipped the flag, False if it was already set
            (another run won the claim) or the budget no longer exists.
        """
        pass

    @abstractmethod
    async def release_alert_flag(self, budget_id: int, flag: BudgetAlertFlag) -> bool:
        """Undo a claim whose notification could not be delivered.

        Sets the flag back to false only if it is currently true.

        Returns:
            True if the flag was cleared.
        """
        pass

    @abstractmethod
    async def reset_alert_flags(self) -> int:
        """Clear every band flag on every budget in one bulk update.

        Only budgets with at least one flag set are touched, so repeating
        the reset within a period changes nothing.

        Returns:
            Number of budgets whose flags were cleared.
        """
        pass
