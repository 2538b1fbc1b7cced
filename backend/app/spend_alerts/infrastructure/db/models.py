"""SQLAlchemy ORM models mapping to domain entities.

These models represent the database schema and handle persistence concerns.
They should be converted to/from domain entities via repository mappers.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import DeclarativeBase, relationship

# Import domain enums for SQLAlchemy Enum columns
from app.spend_alerts.domain.entities.notification import NotificationType


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UserModel(Base):
    """ORM model for users table (notification profile only)."""

    __tablename__ = "users"

    id = Column(String(128), primary_key=True)
    fcm_token = Column(String(512), nullable=True)
    notifications_enabled = Column(Boolean, default=True, nullable=False)
    budget_alerts = Column(Boolean, default=True, nullable=False)
    spending_insights = Column(Boolean, default=True, nullable=False)
    price_drops = Column(Boolean, default=True, nullable=False)

    # Relationships
    budgets = relationship("BudgetModel", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<UserModel(id='{self.id}')>"


class BudgetModel(Base):
    """ORM model for budgets table."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    month = Column(String(7), nullable=False)
    seventy_five_percent_alert_sent = Column(Boolean, default=False, nullable=False)
    ninety_percent_alert_sent = Column(Boolean, default=False, nullable=False)
    overage_alert_sent = Column(Boolean, default=False, nullable=False)

    # Relationships
    user = relationship("UserModel", back_populates="budgets")

    __table_args__ = (
        UniqueConstraint("user_id", "category", "month", name="uq_budgets_user_category_month"),
        Index("ix_budgets_user_month", "user_id", "month"),
    )

    def __repr__(self) -> str:
        return f"<BudgetModel(id={self.id}, user_id='{self.user_id}', month='{self.month}')>"


class TransactionModel(Base):
    """ORM model for transactions table (read only by the alert engine)."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    category = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)

    # Composite index for the budget spending aggregate
    __table_args__ = (
        Index("ix_transactions_user_type_category_date", "user_id", "type", "category", "date"),
    )

    def __repr__(self) -> str:
        return f"<TransactionModel(id={self.id}, user_id='{self.user_id}', amount={self.amount})>"


class PriceTrackingModel(Base):
    """ORM model for price_tracking table."""

    __tablename__ = "price_tracking"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    item_name = Column(String(255), nullable=False)
    target_price = Column(Numeric(20, 8), nullable=False)
    last_known_price = Column(Numeric(20, 8), nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    last_checked = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_price_tracking_user_active", "user_id", "active"),)

    def __repr__(self) -> str:
        return f"<PriceTrackingModel(id={self.id}, item_name='{self.item_name}')>"


class AchievementModel(Base):
    """ORM model for achievements table.

    The primary key is the achievement key ("{user_id}_spending_{milestone}"),
    which makes INSERT ... ON CONFLICT DO NOTHING the create-if-absent claim.
    """

    __tablename__ = "achievements"

    key = Column(String(200), primary_key=True)
    user_id = Column(
        String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(50), nullable=False)
    milestone = Column(Integer, nullable=False)
    total_spending = Column(Numeric(14, 2), nullable=False)
    achieved_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "type", "milestone", name="uq_achievements_user_milestone"),
    )

    def __repr__(self) -> str:
        return f"<AchievementModel(key='{self.key}')>"


class NotificationModel(Base):
    """ORM model for notifications table (the audit trail)."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(SQLEnum(NotificationType), nullable=False)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    read = Column(Boolean, default=False, nullable=False)
    data = Column(JSON, nullable=False, default=dict)

    __table_args__ = (Index("ix_notifications_user_timestamp", "user_id", "timestamp"),)

    def __repr__(self) -> str:
        return f"<NotificationModel(id={self.id}, user_id='{self.user_id}', type={self.type})>"
