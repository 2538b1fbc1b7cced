"""Shared plumbing for the SQLAlchemy repositories."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.spend_alerts.application.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class SqlRepository:
    """Base class giving each repository call its own short transaction.

    Alert runs process users concurrently and an AsyncSession must not be
    shared between coroutines, so repositories hold the session factory
    and open a session per call. Conditional writes commit as soon as the
    call returns, which makes a won claim visible to overlapping runs.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory producing async SQLAlchemy sessions.
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Open a session and transaction, translating driver errors.

        Raises:
            StoreUnavailableError: If the database rejects or drops the call.
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation}: {e}")
            raise StoreUnavailableError(operation, str(e)) from e
