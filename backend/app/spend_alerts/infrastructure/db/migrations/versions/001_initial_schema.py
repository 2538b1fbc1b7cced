"""Initial schema creation for Spend Alerts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Creates the core tables:
- users: Push token and notification switches
- budgets: Monthly category limits with their band alert flags
- transactions: Income and expense entries (read for spending sums)
- price_tracking: Price watches with target and last known price
- achievements: Spending milestones already announced
- notifications: Audit trail of delivered notifications
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial database schema."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("fcm_token", sa.String(length=512), nullable=True),
        sa.Column("notifications_enabled", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("budget_alerts", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("spending_insights", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("price_drops", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create budgets table
    op.create_table(
        "budgets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("amount", sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column(
            "seventy_five_percent_alert_sent",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
        sa.Column(
            "ninety_percent_alert_sent", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("overage_alert_sent", sa.Boolean(), nullable=False, server_default="false"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "category", "month", name="uq_budgets_user_category_month"
        ),
    )
    op.create_index("ix_budgets_user_id", "budgets", ["user_id"])
    op.create_index("ix_budgets_user_month", "budgets", ["user_id", "month"])

    # Create transactions table
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("amount", sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_transactions_user_type_category_date",
        "transactions",
        ["user_id", "type", "category", "date"],
    )

    # Create price_tracking table
    op.create_table(
        "price_tracking",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("item_name", sa.String(length=255), nullable=False),
        sa.Column("target_price", sa.Numeric(precision=20, scale=8), nullable=False),
        sa.Column("last_known_price", sa.Numeric(precision=20, scale=8), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("last_checked", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_price_tracking_user_active", "price_tracking", ["user_id", "active"])

    # Create achievements table
    op.create_table(
        "achievements",
        sa.Column("key", sa.String(length=200), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("milestone", sa.Integer(), nullable=False),
        sa.Column("total_spending", sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column("achieved_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("key"),
        sa.UniqueConstraint(
            "user_id", "type", "milestone", name="uq_achievements_user_milestone"
        ),
    )
    op.create_index("ix_achievements_user_id", "achievements", ["user_id"])

    # Create notifications table
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                "COACHING_TIP",
                "BUDGET_ALERT",
                "PRICE_ALERT",
                "MILESTONE",
                name="notificationtype",
            ),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_timestamp", "notifications", ["timestamp"])
    op.create_index(
        "ix_notifications_user_timestamp", "notifications", ["user_id", "timestamp"]
    )


def downgrade() -> None:
    """Drop all tables and enums."""
    # Drop tables in reverse order of dependencies
    op.drop_table("notifications")
    op.drop_table("achievements")
    op.drop_table("price_tracking")
    op.drop_table("transactions")
    op.drop_table("budgets")
    op.drop_table("users")

    # Drop enum types
    op.execute("DROP TYPE IF EXISTS notificationtype")
