"""Use case for the monthly reset of budget alert flags."""

import logging

from app.spend_alerts.domain.repositories.budget_repository import BudgetRepository

logger = logging.getLogger(__name__)


class ResetBudgetAlertsUseCase:
    """Application service clearing every budget band flag for a new period.

    Must run before the first budget check of a month. A late reset only
    delays re-firing: budgets still over a band fire on the next check.
    """

    def __init__(self, budget_repository: BudgetRepository) -> None:
        self._budget_repository = budget_repository

    async def execute(self) -> int:
        """Clear the flags in one bulk update.

        Returns:
            Number of budgets changed (0 when the period was already reset).
        """
        count = await self._budget_repository.reset_alert_flags()
        logger.info(f"Reset alert flags for {count} budgets")
        return count
