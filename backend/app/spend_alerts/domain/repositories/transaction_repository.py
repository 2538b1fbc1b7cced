"""Abstract repository interface for transaction aggregates."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal


class TransactionRepository(ABC):
    """Read-only aggregates over a user's transactions.

    The alert engine never loads individual transactions; it only needs
    the sums that feed its metrics.
    """

    @abstractmethod
    async def sum_expenses(
        self,
        user_id: str,
        category: str,
        start: datetime,
        end: datetime,
    ) -> Decimal:
        """Sum expense amounts in a category within an inclusive window.

        Args:
            user_id: The user whose transactions are summed.
            category: Transaction category.
            start: Window start (inclusive).
            end: Window end (inclusive).

        Returns:
            The total, Decimal("0") if there are no matching transactions.
        """
        pass

    @abstractmethod
    async def sum_lifetime_expenses(self, user_id: str) -> Decimal:
        """Sum every expense the user has ever recorded."""
        pass
