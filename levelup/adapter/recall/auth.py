"""Service account access tokens for the recall broker.

Implements the OAuth 2.0 JWT-bearer grant: an RS256 assertion signed with
the service account's private key is traded for a short-lived access
token, which is cached until shortly before it expires.
"""

import asyncio
import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import jwt
from pydantic import BaseModel, ValidationError

from levelup.adapter.error import UpstreamUnavailableError
from levelup.util.error import ConfigurationError

logger = logging.getLogger(__name__)

JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME = timedelta(hours=1)

# Refresh this long before the cached token expires
REFRESH_MARGIN = timedelta(seconds=60)


class ServiceAccountKey(BaseModel):
    """Fields read from a Google service account key file."""

    client_email: str
    private_key: str
    private_key_id: str | None = None
    token_uri: str = "https://oauth2.googleapis.com/token"


class ServiceAccountTokenSource:
    """Issues and caches access tokens for a service account."""

    def __init__(self, key: ServiceAccountKey, scopes: list[str]) -> None:
        self.key = key
        self.scopes = scopes
        self._token: str | None = None
        self._expires_at: datetime | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_file(cls, path: str, scopes: list[str]) -> "ServiceAccountTokenSource":
        """Load a service account key file.

        Raises:
            ConfigurationError: If the file is missing or not a key file
        """
        key_path = Path(path)
        if not key_path.is_file():
            raise ConfigurationError(f"Service account key file not found: {path}")

        try:
            key = ServiceAccountKey.model_validate(json.loads(key_path.read_text()))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid service account key file {path}: {e}")

        return cls(key, scopes)

    def _assertion(self, now: datetime) -> str:
        claims = {
            "iss": self.key.client_email,
            "scope": " ".join(self.scopes),
            "aud": self.key.token_uri,
            "iat": int(now.timestamp()),
            "exp": int((now + ASSERTION_LIFETIME).timestamp()),
        }
        headers = {"kid": self.key.private_key_id} if self.key.private_key_id else None
        return jwt.encode(
            claims, self.key.private_key, algorithm="RS256", headers=headers
        )

    async def get_access_token(self) -> str:
        """Return a valid access token, fetching a new one when needed.

        Raises:
            UpstreamUnavailableError: If the token endpoint fails
        """
        async with self._lock:
            now = datetime.now(timezone.utc)
            if self._token and self._expires_at and now < self._expires_at:
                return self._token

            try:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self.key.token_uri,
                        data={
                            "grant_type": JWT_BEARER_GRANT,
                            "assertion": self._assertion(now),
                        },
                        headers={"Accept": "application/json"},
                        timeout=30.0,
                    )
            except httpx.HTTPError as e:
                logger.error(f"Service account token request failed: {e}")
                raise UpstreamUnavailableError(f"HTTP error fetching access token: {e}")

            if response.status_code != 200:
                logger.error(
                    f"Service account token request rejected: "
                    f"{response.status_code} {response.text}"
                )
                raise UpstreamUnavailableError(
                    f"Access token request failed: {response.status_code}"
                )

            try:
                body = response.json()
                expires_in = int(body.get("expires_in", 3600))
            except (ValueError, TypeError, AttributeError):
                raise UpstreamUnavailableError("Access token response was malformed")

            token = body.get("access_token")
            if not token:
                raise UpstreamUnavailableError("Failed to retrieve a valid access token")

            self._token = token
            self._expires_at = now + timedelta(seconds=expires_in) - REFRESH_MARGIN
            logger.info(f"Fetched access token for {self.key.client_email}")
            return token
