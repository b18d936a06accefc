"""Player profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from levelup.domain.model.player import PlayerProfile
from levelup.domain.value import RecallToken


class PlayerRepository(ABC):
    """Repository for recall player profiles keyed by durable recall token."""

    @abstractmethod
    async def find_by_token(self, token: RecallToken) -> Optional[PlayerProfile]:
        """Find a profile by recall token.

        Args:
            token: Durable recall token

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_if_absent(
        self, token: RecallToken, profile: PlayerProfile
    ) -> tuple[PlayerProfile, bool]:
        """Store ``profile`` under ``token`` unless one is already stored.

        Args:
            token: Durable recall token
            profile: Profile to store

        Returns:
            The stored profile, and True if this call inserted it
        """
        pass
