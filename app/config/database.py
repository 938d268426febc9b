"""
Database engine and session factory.

The engine is created explicitly at process start and handed to the
services that need it; nothing is configured lazily at import time.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create async engine from settings.

    Args:
        settings: Application settings

    Returns:
        Configured AsyncEngine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        pool_pre_ping=True,
    )


def create_session_maker(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """
    Create session factory bound to an engine.

    Args:
        engine: Async engine

    Returns:
        Session factory producing AsyncSession objects
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
