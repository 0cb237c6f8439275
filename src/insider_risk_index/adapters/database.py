"""Async database engine, session factory and per-request session dependency."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from insider_risk_index.core.models import Base
from insider_risk_index.observability import get_logger
from insider_risk_index.settings import Settings

logger = get_logger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database URL.

    Args:
        settings: Service settings.

    Returns:
        A new AsyncEngine. The caller owns it and must dispose it.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the session factory bound to ``engine``."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", tables=sorted(Base.metadata.tables))


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one request.

    Commits when the request handler returns normally and rolls back when
    it raises.

    Args:
        request: The incoming request; the session factory is read from
            ``request.app.state.session_factory``.

    Yields:
        An AsyncSession.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
