#!/usr/bin/env python3
"""Run database migrations before starting the worker and API.

This script runs Alembic migrations and verifies that the alert engine's
tables exist. Safe to run multiple times (idempotent).
"""

import asyncio
import os
import sys

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from alembic import command
from alembic.config import Config
from sqlalchemy import text

from app.spend_alerts.infrastructure.db.models import Base
from app.spend_alerts.infrastructure.db.session import create_engine, create_session_factory


def run_migrations() -> bool:
    """Run Alembic migrations."""
    print("=" * 50)
    print("Running database migrations...")
    print("=" * 50)

    # Alembic config - alembic.ini is in backend directory
    alembic_cfg = Config("alembic.ini")

    try:
        command.upgrade(alembic_cfg, "head")
        print("✅ Migrations completed successfully!")
        return True
    except Exception as e:
        print(f"❌ Migration error: {e}")
        import traceback
        traceback.print_exc()
        return False


async def check_tables() -> bool:
    """Check that every mapped table exists."""
    print("\n" + "=" * 50)
    print("Checking database tables...")
    print("=" * 50)

    engine = create_engine()
    try:
        async with create_session_factory(engine)() as session:
            result = await session.execute(
                text("SELECT tablename FROM pg_tables WHERE schemaname='public'")
            )
            tables = {row[0] for row in result.fetchall()}
    finally:
        await engine.dispose()

    missing = sorted(set(Base.metadata.tables) - tables)
    if missing:
        print(f"❌ Missing tables: {', '.join(missing)}")
        return False

    print(f"✅ Found all {len(Base.metadata.tables)} tables")
    return True


if __name__ == "__main__":
    print("\n🚀 Starting migration process...\n")

    if not run_migrations():
        print("\n❌ Migrations failed. Check errors above.")
        sys.exit(1)

    if asyncio.run(check_tables()):
        print("\n✅ Database is ready!")
        sys.exit(0)

    print("\n❌ Migrations ran but tables are missing. Check logs above.")
    sys.exit(1)
