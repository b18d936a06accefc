"""Google identity verifier.

Verifies Google ID tokens against Google's published signing keys and
exchanges one-time server auth codes for ID tokens.
"""

import asyncio

import httpx
import jwt
import logfire

from levelup.domain.error import ExchangeFailedError, InvalidCredentialError
from levelup.domain.service.verification_service import IdentityVerifier
from levelup.domain.value import (
    ExternalIdentity,
    GoogleAuthCode,
    GoogleIdToken,
    IdentityProvider,
    ProviderCredential,
    VerifiedIdentity,
)

# Clock skew tolerated on exp/iat
CLOCK_SKEW_SECONDS = 60


class GoogleIdentityVerifier(IdentityVerifier):
    """Base class for Google verifiers.

    Provides type distinction for dependency injection.
    """

    pass


def _verified(claims: dict, player_id: str | None) -> VerifiedIdentity:
    subject = claims["sub"]
    player_id = player_id or subject
    return VerifiedIdentity(
        identity=ExternalIdentity(provider=IdentityProvider.GOOGLE, subject=player_id),
        player_id=player_id,
        provider_subject=subject,
        email=claims.get("email"),
    )


class RealGoogleIdentityVerifier(GoogleIdentityVerifier):
    """Google verifier backed by Google's OAuth endpoints."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        token_url: str,
        jwks_url: str,
        issuers: list[str],
        jwks_client: jwt.PyJWKClient | None = None,
    ) -> None:
        """Initialize Google verifier.

        Args:
            client_id: Web client id; also the expected ID token audience
            client_secret: Web client secret used for code exchange
            redirect_uri: Redirect URI the auth code was minted for
            token_url: OAuth token endpoint
            jwks_url: Google signing keys endpoint
            issuers: Accepted ``iss`` values
            jwks_client: Preconfigured key client (tests inject one)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.token_url = token_url
        self.issuers = issuers
        self._jwks_client = jwks_client or jwt.PyJWKClient(jwks_url)

    async def verify(self, credential: ProviderCredential) -> VerifiedIdentity:
        """Verify a Google ID token or auth code.

        Raises:
            InvalidCredentialError: If Google rejects the ID token
            ExchangeFailedError: If the auth code yields no ID token
        """
        if isinstance(credential, GoogleAuthCode):
            id_token = await self._exchange_code(credential.auth_code)
        elif isinstance(credential, GoogleIdToken):
            id_token = credential.id_token
        else:
            raise InvalidCredentialError(
                f"Google cannot verify {type(credential).__name__}"
            )

        claims = await self._verify_id_token(id_token)

        logfire.info(
            "Google credential verified",
            sub=claims["sub"],
            credential_type=type(credential).__name__,
        )
        return _verified(claims, credential.player_id)

    async def _exchange_code(self, code: str) -> str:
        """Exchange a server auth code for an ID token.

        Raises:
            ExchangeFailedError: If the exchange fails or returns no ID token
        """
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Google code exchange HTTP error", error=str(e))
            raise ExchangeFailedError(f"HTTP error during code exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google code exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ExchangeFailedError(f"Code exchange failed: {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            raise ExchangeFailedError("Code exchange returned a non-JSON body")

        id_token = body.get("id_token") if isinstance(body, dict) else None
        if not id_token:
            raise ExchangeFailedError("Code exchange returned no id_token")
        return id_token

    async def _verify_id_token(self, id_token: str) -> dict:
        """Check signature, audience, issuer and expiry of an ID token.

        Raises:
            InvalidCredentialError: On any verification failure
        """
        try:
            # Key fetch is blocking I/O; keep it off the event loop
            signing_key = await asyncio.to_thread(
                self._jwks_client.get_signing_key_from_jwt, id_token
            )
            claims = jwt.decode(
                id_token,
                key=signing_key.key,
                algorithms=["RS256"],
                audience=self.client_id,
                options={"require": ["exp", "iat", "aud", "iss", "sub"]},
                leeway=CLOCK_SKEW_SECONDS,
            )
        except jwt.ExpiredSignatureError:
            raise InvalidCredentialError("Google ID token has expired")
        except jwt.InvalidAudienceError:
            raise InvalidCredentialError(
                f"Google ID token audience mismatch (want={self.client_id})"
            )
        except jwt.PyJWTError as e:
            raise InvalidCredentialError(f"Invalid Google ID token: {e}")

        if claims.get("iss") not in self.issuers:
            raise InvalidCredentialError(
                f"Google ID token issuer not accepted: {claims.get('iss')}"
            )
        return claims


class MockGoogleIdentityVerifier(GoogleIdentityVerifier):
    """Mock Google verifier for development and testing.

    Accepts any credential except ``"invalid"``; the auth code
    ``"no-id-token"`` simulates an exchange that returns nothing.
    """

    SUBJECT = "mock-google-sub-123"
    EMAIL = "player@example.com"

    async def verify(self, credential: ProviderCredential) -> VerifiedIdentity:
        """Return deterministic Google claims."""
        if isinstance(credential, GoogleAuthCode):
            if credential.auth_code == "invalid":
                raise InvalidCredentialError("Invalid authorization code")
            if credential.auth_code == "no-id-token":
                raise ExchangeFailedError("Code exchange returned no id_token")
        elif isinstance(credential, GoogleIdToken):
            if credential.id_token == "invalid":
                raise InvalidCredentialError("Invalid Google ID token")
        else:
            raise InvalidCredentialError(
                f"Google cannot verify {type(credential).__name__}"
            )

        # Yield like a real network call would
        await asyncio.sleep(0)
        return _verified(
            {"sub": self.SUBJECT, "email": self.EMAIL},
            credential.player_id,
        )
