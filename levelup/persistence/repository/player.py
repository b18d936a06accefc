"""Player profile repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from levelup.domain.model.player import PlayerProfile
from levelup.domain.repository.player import PlayerRepository
from levelup.domain.value import RecallToken
from levelup.persistence.mappers import player_to_dict, row_to_player
from levelup.persistence.tables import recall_players_table


class PostgresPlayerRepository(PlayerRepository):
    """PostgreSQL implementation of PlayerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_token(self, token: RecallToken) -> Optional[PlayerProfile]:
        """Get profile by recall token."""
        stmt = select(recall_players_table).where(
            recall_players_table.c.token == token
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_player(dict(row))

    async def insert_if_absent(
        self, token: RecallToken, profile: PlayerProfile
    ) -> tuple[PlayerProfile, bool]:
        """Store the profile unless the token already has one."""
        stmt = (
            pg_insert(recall_players_table)
            .values(**player_to_dict(token, profile))
            .on_conflict_do_nothing(index_elements=["token"])
            .returning(recall_players_table.c.token)
        )
        inserted = (await self.session.execute(stmt)).scalar_one_or_none()
        await self.session.flush()

        if inserted is not None:
            return profile, True

        existing = await self.find_by_token(token)
        if existing is None:
            raise RuntimeError(f"Recall profile vanished for token {token}")
        return existing, False
