"""Facebook identity verifier.

Inspects user access tokens with the Graph API ``debug_token`` endpoint,
authenticated by the app access token, then reads basic profile fields.
"""

import asyncio

import httpx
import logfire

from levelup.domain.error import InvalidCredentialError, ProfileFetchFailedError
from levelup.domain.service.verification_service import IdentityVerifier
from levelup.domain.value import (
    ExternalIdentity,
    FacebookAccessToken,
    IdentityProvider,
    ProviderCredential,
    VerifiedIdentity,
)


class FacebookIdentityVerifier(IdentityVerifier):
    """Base class for Facebook verifiers.

    Provides type distinction for dependency injection.
    """

    pass


def _verified(user_id: str, profile: dict) -> VerifiedIdentity:
    identity = ExternalIdentity(provider=IdentityProvider.FACEBOOK, subject=user_id)
    return VerifiedIdentity(
        identity=identity,
        player_id=identity.key,
        provider_subject=user_id,
        # Email is optional on Facebook; absent becomes empty
        email=profile.get("email", ""),
    )


class RealFacebookIdentityVerifier(FacebookIdentityVerifier):
    """Facebook verifier backed by the Graph API."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        graph_url: str = "https://graph.facebook.com",
        profile_fields: str = "id,email",
    ) -> None:
        """Initialize Facebook verifier.

        Args:
            app_id: Facebook app id
            app_secret: Facebook app secret
            graph_url: Graph API base URL
            profile_fields: Fields requested from ``/me``
        """
        self.app_id = app_id
        self.app_secret = app_secret
        self.graph_url = graph_url.rstrip("/")
        self.profile_fields = profile_fields

    @property
    def app_access_token(self) -> str:
        return f"{self.app_id}|{self.app_secret}"

    async def verify(self, credential: ProviderCredential) -> VerifiedIdentity:
        """Verify a Facebook user access token.

        The profile lookup is best-effort: if it fails the identity is
        still returned, with an empty email.

        Raises:
            InvalidCredentialError: If Facebook rejects the token or cannot
                be reached
        """
        if not isinstance(credential, FacebookAccessToken):
            raise InvalidCredentialError(
                f"Facebook cannot verify {type(credential).__name__}"
            )

        user_id = await self._inspect_token(credential.access_token)

        try:
            profile = await self._fetch_profile(credential.access_token)
        except ProfileFetchFailedError as e:
            logfire.warn("Facebook profile unavailable", user_id=user_id, error=str(e))
            profile = {}

        logfire.info("Facebook credential verified", user_id=user_id)
        return _verified(user_id, profile)

    async def _get(self, path: str, params: dict) -> httpx.Response:
        async with httpx.AsyncClient() as client:
            return await client.get(
                f"{self.graph_url}{path}",
                params=params,
                headers={"Accept": "application/json"},
                timeout=30.0,
            )

    async def _inspect_token(self, access_token: str) -> str:
        """Check a user token and return the user id it was issued to."""
        try:
            response = await self._get(
                "/debug_token",
                {"input_token": access_token, "access_token": self.app_access_token},
            )
        except httpx.HTTPError as e:
            logfire.error("Facebook debug_token HTTP error", error=str(e))
            raise InvalidCredentialError(f"HTTP error during token inspection: {e}")

        if response.status_code != 200:
            logfire.error(
                "Facebook debug_token failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise InvalidCredentialError(
                f"Token inspection failed: {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError:
            raise InvalidCredentialError("Token inspection returned a non-JSON body")

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict) or not data.get("is_valid"):
            raise InvalidCredentialError("Facebook access token is not valid")

        app_id = data.get("app_id")
        if app_id and str(app_id) != self.app_id:
            raise InvalidCredentialError(
                f"Facebook access token issued to another app: {app_id}"
            )

        user_id = data.get("user_id")
        if not user_id:
            raise InvalidCredentialError("Facebook token inspection returned no user_id")
        return str(user_id)

    async def _fetch_profile(self, access_token: str) -> dict:
        """Read basic profile fields for the token's user."""
        try:
            response = await self._get(
                "/me", {"fields": self.profile_fields, "access_token": access_token}
            )
        except httpx.HTTPError as e:
            raise ProfileFetchFailedError(f"HTTP error fetching profile: {e}")

        if response.status_code != 200:
            raise ProfileFetchFailedError(
                f"Profile fetch failed: {response.status_code}"
            )

        try:
            profile = response.json()
        except ValueError:
            raise ProfileFetchFailedError("Profile fetch returned a non-JSON body")
        if not isinstance(profile, dict):
            raise ProfileFetchFailedError("Profile fetch returned an unexpected body")
        return profile


class MockFacebookIdentityVerifier(FacebookIdentityVerifier):
    """Mock Facebook verifier for development and testing.

    Any token except ``"invalid"`` verifies. A token of the form
    ``user:<id>`` verifies as that user id, so tests can make distinct
    players; ``"no-profile"`` simulates a failed profile lookup.
    """

    USER_ID = "10000000001"
    EMAIL = "player@example.com"

    async def verify(self, credential: ProviderCredential) -> VerifiedIdentity:
        """Return deterministic Facebook claims."""
        if not isinstance(credential, FacebookAccessToken):
            raise InvalidCredentialError(
                f"Facebook cannot verify {type(credential).__name__}"
            )

        token = credential.access_token
        if token == "invalid":
            raise InvalidCredentialError("Facebook access token is not valid")

        await asyncio.sleep(0)

        user_id = self.USER_ID
        if token.startswith("user:"):
            user_id = token.removeprefix("user:")

        if token == "no-profile":
            return _verified(user_id, {})
        return _verified(user_id, {"email": self.EMAIL})
