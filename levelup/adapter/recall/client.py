"""Play Games Recall broker clients."""

import asyncio
import logging
from urllib.parse import quote

import httpx

from levelup.adapter.error import UpstreamUnavailableError
from levelup.adapter.recall.auth import ServiceAccountTokenSource
from levelup.domain.service.recall_service import RecallBroker
from levelup.domain.value import RecallSessionId, RecallToken

logger = logging.getLogger(__name__)


class PlayGamesRecallBroker(RecallBroker):
    """Base class for recall brokers.

    Provides type distinction for dependency injection.
    """

    pass


class RealPlayGamesRecallBroker(PlayGamesRecallBroker):
    """Recall broker backed by the Play Games Services server API."""

    def __init__(
        self,
        token_source: ServiceAccountTokenSource,
        api_url: str = "https://games.googleapis.com/games/v1",
        conflicting_links_resolution_policy: str = "CREATE_NEW_LINK",
    ) -> None:
        """Initialize recall broker.

        Args:
            token_source: Service account access token source
            api_url: Play Games Services API base URL
            conflicting_links_resolution_policy: Policy sent when linking
        """
        self.token_source = token_source
        self.api_url = api_url.rstrip("/")
        self.conflicting_links_resolution_policy = conflicting_links_resolution_policy

    async def _headers(self) -> dict[str, str]:
        token = await self.token_source.get_access_token()
        return {"Authorization": f"Bearer {token}", "Accept": "application/json"}

    async def find_tokens(self, session_id: RecallSessionId) -> list[RecallToken]:
        """List recall tokens for a session; unknown sessions have none."""
        url = f"{self.api_url}/recall/tokens/{quote(session_id, safe='')}"
        headers = await self._headers()

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, headers=headers, timeout=30.0)
        except httpx.HTTPError as e:
            logger.error(f"Recall token lookup failed: {e}")
            raise UpstreamUnavailableError(f"HTTP error retrieving recall tokens: {e}")

        if response.status_code == 404:
            return []
        if response.status_code != 200:
            logger.error(
                f"Recall token lookup rejected: {response.status_code} {response.text}"
            )
            raise UpstreamUnavailableError(
                f"Failed to retrieve recall tokens: {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError:
            raise UpstreamUnavailableError("Recall token lookup returned a non-JSON body")

        tokens = body.get("tokens") if isinstance(body, dict) else None
        if not isinstance(tokens, list):
            # A 200 without a token list means the session has no links
            return []
        return [
            RecallToken(entry["token"])
            for entry in tokens
            if isinstance(entry, dict) and entry.get("token")
        ]

    async def link_persona(
        self, session_id: RecallSessionId, persona: str, token: RecallToken
    ) -> None:
        """Link ``persona`` and ``token`` to the player behind the session."""
        headers = await self._headers()
        payload = {
            "sessionId": session_id,
            "persona": persona,
            "token": token,
            "conflictingLinksResolutionPolicy": self.conflicting_links_resolution_policy,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.api_url}/recall:linkPersona",
                    json=payload,
                    headers=headers,
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logger.error(f"Recall link failed: {e}")
            raise UpstreamUnavailableError(f"HTTP error linking persona: {e}")

        if response.status_code != 200:
            logger.error(
                f"Recall link rejected: {response.status_code} {response.text}"
            )
            raise UpstreamUnavailableError("Failed to link new persona.")

        logger.info("Linked new recall persona")


class MockPlayGamesRecallBroker(PlayGamesRecallBroker):
    """In-memory recall broker for development and testing.

    Sessions map straight to token lists. The session id ``"unavailable"``
    simulates a broker outage.
    """

    UNAVAILABLE_SESSION = "unavailable"

    def __init__(self) -> None:
        self.links: dict[str, list[RecallToken]] = {}

    def seed(self, session_id: str, token: str) -> None:
        """Pre-link a token, as if created by another deployment."""
        self.links.setdefault(session_id, []).append(RecallToken(token))

    async def find_tokens(self, session_id: RecallSessionId) -> list[RecallToken]:
        await asyncio.sleep(0)
        if session_id == self.UNAVAILABLE_SESSION:
            raise UpstreamUnavailableError("Recall broker unavailable")
        return list(self.links.get(session_id, []))

    async def link_persona(
        self, session_id: RecallSessionId, persona: str, token: RecallToken
    ) -> None:
        await asyncio.sleep(0)
        if session_id == self.UNAVAILABLE_SESSION:
            raise UpstreamUnavailableError("Failed to link new persona.")
        self.links.setdefault(session_id, []).insert(0, token)
