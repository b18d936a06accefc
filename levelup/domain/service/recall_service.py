"""Cross-device recall domain service."""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from levelup.domain.model import PlayerProfile
from levelup.domain.repository import PlayerRepository
from levelup.domain.value import RecallSessionId, RecallStatus, RecallToken

from .base import Service


class RecallBroker:
    """Cross-device identity broker interface.

    The broker maps an ephemeral per-device session handle to durable tokens
    this service registered earlier, without exposing the player's identity.
    """

    async def find_tokens(self, session_id: RecallSessionId) -> list[RecallToken]:
        """Look up tokens linked to the player behind ``session_id``.

        Args:
            session_id: Per-device recall session handle

        Returns:
            Linked tokens, most relevant first; empty if none

        Raises:
            UpstreamUnavailableError: If the broker cannot be reached
        """
        raise NotImplementedError

    async def link_persona(
        self, session_id: RecallSessionId, persona: str, token: RecallToken
    ) -> None:
        """Register ``token`` for the player behind ``session_id``.

        Args:
            session_id: Per-device recall session handle
            persona: Stable, non-sensitive account label
            token: Durable token to hand back on future recalls

        Raises:
            UpstreamUnavailableError: If the broker rejects or cannot be reached
        """
        raise NotImplementedError


@dataclass
class RecallOutcome:
    """Result of looking up a recall session."""

    status: RecallStatus
    token: RecallToken | None = None
    profile: PlayerProfile | None = None


class RecallService(Service):
    """Restores or provisions player profiles through the recall broker."""

    def __init__(
        self, recall_broker: RecallBroker, player_repository: PlayerRepository
    ) -> None:
        """Initialize recall service.

        Args:
            recall_broker: Cross-device identity broker
            player_repository: Local profile store
        """
        self.recall_broker = recall_broker
        self.player_repository = player_repository

    async def recall(self, session_id: RecallSessionId) -> RecallOutcome:
        """Resolve a recall session to a stored profile.

        Args:
            session_id: Per-device recall session handle

        Returns:
            NEW_PLAYER if the broker knows no token, ACCOUNT_FOUND with the
            profile if the first token is stored locally, ORPHANED_TOKEN if
            the broker has a token this service has no record of
        """
        with logfire.span("recall_service.recall"):
            tokens = await self.recall_broker.find_tokens(session_id)
            if not tokens:
                logfire.info("No recall tokens for session; new player")
                return RecallOutcome(status=RecallStatus.NEW_PLAYER)

            token = tokens[0]
            profile = await self.player_repository.find_by_token(token)
            if profile:
                logfire.info("Recall token matched stored profile")
                return RecallOutcome(
                    status=RecallStatus.ACCOUNT_FOUND, token=token, profile=profile
                )

            logfire.warn(
                "Orphaned recall token: broker has a link, store has no record",
                token_count=len(tokens),
            )
            return RecallOutcome(status=RecallStatus.ORPHANED_TOKEN, token=token)

    async def create_account(
        self, session_id: RecallSessionId, username: str
    ) -> PlayerProfile:
        """Mint a durable token, register it with the broker, store a profile.

        The broker link is made first; if it fails nothing is stored.

        Args:
            session_id: Per-device recall session handle
            username: Display name chosen by the player

        Returns:
            The stored starting profile
        """
        token = RecallToken(str(uuid4()))

        with logfire.span("recall_service.create_account", username=username):
            # The token doubles as the persona: stable and carries no identity
            await self.recall_broker.link_persona(session_id, token, token)

            profile, _ = await self.player_repository.insert_if_absent(
                token, PlayerProfile(username=username)
            )
            logfire.info("Recall account created", username=username)
            return profile
