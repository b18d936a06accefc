"""Engine and session factory for the PostgreSQL account store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from levelup.config import DatabaseSettings


def create_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the asyncpg engine for ``database.url``."""
    return create_async_engine(
        database.url,
        echo=echo,
        # Connections idle behind a load balancer get dropped silently
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories flush explicitly; rows stay readable after commit
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
