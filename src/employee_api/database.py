"""Database engine and session management.

The engine owns the connection pool. It is created once by the application
factory, kept on ``app.state`` and disposed when the application shuts down.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from employee_api.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine with its connection pool
    """
    options: dict = {
        # Validate connections before checkout to detect stale connections
        "pool_pre_ping": True,
        # Security: Never echo SQL statements as they may contain sensitive data
        "echo": False,
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            # Recycle connections after 1 hour (important for cloud proxies)
            pool_recycle=3600,
        )
    return create_async_engine(settings.async_database_url, **options)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency.

    Writes are committed by the service that makes them, before the response
    is built. Anything left uncommitted is rolled back and the session is
    always returned to the pool.
    """
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise
