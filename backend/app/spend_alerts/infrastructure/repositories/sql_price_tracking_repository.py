"""SQLAlchemy implementation of PriceTrackingRepository."""

from datetime import datetime
from decimal import Decimal
from typing import List

from sqlalchemy import select, update

from app.spend_alerts.domain.entities.tracked_item import TrackedPriceItem
from app.spend_alerts.domain.repositories.price_tracking_repository import (
    PriceTrackingRepository,
)
from app.spend_alerts.infrastructure.db.models import PriceTrackingModel
from app.spend_alerts.infrastructure.repositories.base import SqlRepository

# Matches Numeric(20, 8); values are rounded before comparing so that the
# expected price in a conditional update equals what the column stores.
_PRICE_SCALE = Decimal("0.00000001")


def _to_column_scale(value: Decimal) -> Decimal:
    return value.quantize(_PRICE_SCALE)


class SqlPriceTrackingRepository(SqlRepository, PriceTrackingRepository):
    """SQLAlchemy-based implementation of the PriceTrackingRepository interface."""

    async def get_active_for_user(self, user_id: str) -> List[TrackedPriceItem]:
        """Retrieve a user's active price watches."""
        stmt = (
            select(PriceTrackingModel)
            .where(PriceTrackingModel.user_id == user_id, PriceTrackingModel.active.is_(True))
            .order_by(PriceTrackingModel.id)
        )
        async with self._transaction("list tracked items") as session:
            result = await session.execute(stmt)
            return [self._to_entity(m) for m in result.scalars().all()]

    async def try_update_last_known_price(
        self,
        item_id: int,
        expected_price: Decimal,
        new_price: Decimal,
    ) -> bool:
        """Replace the last known price only if it still equals expected_price."""
        stmt = (
            update(PriceTrackingModel)
            .where(
                PriceTrackingModel.id == item_id,
                PriceTrackingModel.last_known_price == _to_column_scale(expected_price),
            )
            .values(last_known_price=_to_column_scale(new_price))
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("update last known price") as session:
            result = await session.execute(stmt)
            return result.rowcount == 1

    async def mark_checked(self, item_id: int, checked_at: datetime) -> None:
        """Stamp last_checked on a tracked item."""
        stmt = (
            update(PriceTrackingModel)
            .where(PriceTrackingModel.id == item_id)
            .values(last_checked=checked_at)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("mark item checked") as session:
            await session.execute(stmt)

    def _to_entity(self, model: PriceTrackingModel) -> TrackedPriceItem:
        """Convert a PriceTrackingModel to a TrackedPriceItem domain entity."""
        return TrackedPriceItem(
            id=model.id,
            user_id=model.user_id,
            item_name=model.item_name,
            target_price=Decimal(str(model.target_price)),
            last_known_price=Decimal(str(model.last_known_price)),
            active=model.active,
            last_checked=model.last_checked,
        )
