"""Async engine, session factory and the per-request transaction."""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fitplan.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    pool_pre_ping=True,
    echo=settings.debug,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def session_scope(
    maker: async_sessionmaker[AsyncSession] = async_session_maker,
) -> AsyncIterator[AsyncSession]:
    """One unit of work: commit on success, roll back and re-raise on error."""
    async with maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.debug("Rolling back session after error", exc_info=True)
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session.

    Committed once after the endpoint returns, rolled back if anything raised,
    so a challenge completion and its reward credit land together or not at all.
    """
    async with session_scope() as session:
        yield session
