"""Async database session management.

Provides async SQLAlchemy engine and session factory for PostgreSQL
using asyncpg driver.

Celery tasks run each job inside its own `asyncio.run` loop, and asyncpg
connections cannot outlive the loop that opened them, so job runs build a
private engine with `create_engine` and dispose it afterwards.
The FastAPI app keeps one lazily created engine for its lifetime.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def _get_async_database_url(settings: Settings) -> str:
    """Convert the configured database URL to its asyncpg variant."""
    url = str(settings.database_url)

    # Replace postgresql:// or postgresql+psycopg:// with postgresql+asyncpg://
    if url.startswith("postgresql+psycopg://"):
        async_url = url.replace("postgresql+psycopg://", "postgresql+asyncpg://")
    elif url.startswith("postgresql://"):
        async_url = url.replace("postgresql://", "postgresql+asyncpg://")
    else:
        async_url = url

    # Log host part only (without password)
    safe_url = async_url.split("@")[-1] if "@" in async_url else async_url[:50]
    logger.debug(f"Database URL host: {safe_url}")
    return async_url


def create_engine(pool_size: int = 5, settings: Optional[Settings] = None) -> AsyncEngine:
    """Create a new async engine from settings.

    Args:
        pool_size: Connections kept open by the pool.
        settings: Settings to read the URL and echo flag from (defaults to
            the cached application settings).
    """
    settings = settings or get_settings()
    return create_async_engine(
        _get_async_database_url(settings),
        echo=settings.debug,
        pool_size=pool_size,
        max_overflow=10,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Lazy initialization for the web app - created on first request
_engine: Optional[AsyncEngine] = None
_async_session_local: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """Get or create the web app's async database engine."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_async_session_local() -> async_sessionmaker[AsyncSession]:
    """Get or create the web app's async session factory."""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = create_session_factory(get_engine())
    return _async_session_local


async def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency returning the session factory.

    Repositories open their own short transactions, so endpoints receive
    the factory rather than a session.
    """
    return get_async_session_local()


async def dispose_engine() -> None:
    """Dispose the web app engine on shutdown."""
    global _engine, _async_session_local
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_local = None


async def ping(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """Check database connectivity with a trivial query."""
    async with session_factory() as session:
        await session.execute(text("SELECT 1"))
    return True

