"""In-memory player profile repository."""

from typing import Optional

from levelup.domain.model.player import PlayerProfile
from levelup.domain.repository.player import PlayerRepository
from levelup.domain.value import RecallToken


class InMemoryPlayerRepository(PlayerRepository):
    """Process-local implementation of PlayerRepository."""

    def __init__(self) -> None:
        self._players: dict[RecallToken, PlayerProfile] = {}

    async def find_by_token(self, token: RecallToken) -> Optional[PlayerProfile]:
        """Find a profile by recall token."""
        return self._players.get(token)

    async def insert_if_absent(
        self, token: RecallToken, profile: PlayerProfile
    ) -> tuple[PlayerProfile, bool]:
        """Store the profile unless the token already has one."""
        existing = self._players.get(token)
        if existing:
            return existing, False
        self._players[token] = profile
        return profile, True
