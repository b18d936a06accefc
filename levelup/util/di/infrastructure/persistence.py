"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from levelup.config import Settings
from levelup.domain.repository import AccountRepository, PlayerRepository
from levelup.persistence.database import create_engine, create_session_factory
from levelup.persistence.repository import (
    PostgresAccountRepository,
    PostgresPlayerRepository,
)
from levelup.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryPlayerRepository,
)
from levelup.util.di.base import ProviderBase
from levelup.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_player_repository(self, session: AsyncSession) -> PlayerRepository:
        """Provide recall Player repository."""
        return PostgresPlayerRepository(session)


class InMemoryPersistenceProvider(PersistenceProvider):
    """Process-local persistence, the default ``memory`` backend.

    Repositories are APP-scoped so every request shares one store; state is
    lost when the process exits. Tests get isolation by building a fresh
    container per test.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_account_repository(self) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository()

    @provide(scope=Scope.APP)
    def get_player_repository(self) -> PlayerRepository:
        """Provide in-memory player repository."""
        return InMemoryPlayerRepository()
