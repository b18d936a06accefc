"""Unit tests for the Google identity verifier."""

import time
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import jwt
import pytest

from levelup.adapter.google.client import RealGoogleIdentityVerifier
from levelup.domain.error import ExchangeFailedError, InvalidCredentialError
from levelup.domain.value import GoogleAuthCode, GoogleIdToken, IdentityProvider
from tests.keys import generate_rsa_private_key

CLIENT_ID = "test-client.apps.googleusercontent.com"
TOKEN_URL = "https://oauth2.googleapis.com/token"


@pytest.fixture(scope="module")
def signing_key():
    return generate_rsa_private_key()


def _id_token(key, **overrides) -> str:
    now = int(time.time())
    claims = {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "google-sub-1",
        "email": "player@example.com",
        "name": "Player One",
        "iat": now,
        "exp": now + 3600,
    }
    claims.update(overrides)
    return jwt.encode(claims, key, algorithm="RS256", headers={"kid": "k1"})


@pytest.fixture
def verifier(signing_key) -> RealGoogleIdentityVerifier:
    jwks_client = MagicMock()
    jwks_client.get_signing_key_from_jwt.return_value = MagicMock(
        key=signing_key.public_key()
    )
    return RealGoogleIdentityVerifier(
        client_id=CLIENT_ID,
        client_secret="test-google-secret",
        redirect_uri="postmessage",
        token_url=TOKEN_URL,
        jwks_url="https://www.googleapis.com/oauth2/v3/certs",
        issuers=["accounts.google.com", "https://accounts.google.com"],
        jwks_client=jwks_client,
    )


def _token_response(status_code: int, body: dict) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    response.text = str(body)
    return response


class TestVerifyIdToken:
    """Tests for ID token verification."""

    @pytest.mark.asyncio
    async def test_accepts_valid_token(self, verifier, signing_key):
        verified = await verifier.verify(
            GoogleIdToken(id_token=_id_token(signing_key), player_id="a_8734")
        )

        assert verified.identity.provider == IdentityProvider.GOOGLE
        assert verified.identity.key == "gpg-a_8734"
        assert verified.player_id == "a_8734"
        assert verified.provider_subject == "google-sub-1"
        assert verified.email == "player@example.com"

    @pytest.mark.asyncio
    async def test_rejects_other_audience(self, verifier, signing_key):
        token = _id_token(signing_key, aud="someone-else.apps.googleusercontent.com")

        with pytest.raises(InvalidCredentialError, match="audience"):
            await verifier.verify(GoogleIdToken(id_token=token, player_id="p1"))

    @pytest.mark.asyncio
    async def test_rejects_expired_token(self, verifier, signing_key):
        now = int(time.time())
        token = _id_token(signing_key, iat=now - 7200, exp=now - 3600)

        with pytest.raises(InvalidCredentialError, match="expired"):
            await verifier.verify(GoogleIdToken(id_token=token, player_id="p1"))

    @pytest.mark.asyncio
    async def test_rejects_foreign_issuer(self, verifier, signing_key):
        token = _id_token(signing_key, iss="https://evil.example.com")

        with pytest.raises(InvalidCredentialError, match="issuer"):
            await verifier.verify(GoogleIdToken(id_token=token, player_id="p1"))

    @pytest.mark.asyncio
    async def test_rejects_token_signed_by_other_key(self, verifier):
        token = _id_token(generate_rsa_private_key())

        with pytest.raises(InvalidCredentialError):
            await verifier.verify(GoogleIdToken(id_token=token, player_id="p1"))

    @pytest.mark.asyncio
    async def test_key_fetch_failure_is_invalid_credential(self, verifier, signing_key):
        """Unreachable signing keys count as a rejection."""
        verifier._jwks_client.get_signing_key_from_jwt.side_effect = (
            jwt.PyJWKClientError("Fail to fetch data from the url")
        )

        with pytest.raises(InvalidCredentialError):
            await verifier.verify(
                GoogleIdToken(id_token=_id_token(signing_key), player_id="p1")
            )


class TestExchangeAuthCode:
    """Tests for auth code exchange."""

    @pytest.mark.asyncio
    async def test_exchanges_code_and_verifies_id_token(self, verifier, signing_key):
        response = _token_response(200, {"id_token": _id_token(signing_key)})

        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=response)
            mock_client.return_value.__aenter__.return_value.post = post

            verified = await verifier.verify(GoogleAuthCode(auth_code="4/0Ab-code"))

        sent = post.call_args.kwargs["data"]
        assert sent["code"] == "4/0Ab-code"
        assert sent["redirect_uri"] == "postmessage"
        assert sent["grant_type"] == "authorization_code"
        assert post.call_args.args[0] == TOKEN_URL
        # No playerID supplied: keyed on the Google subject
        assert verified.player_id == "google-sub-1"

    @pytest.mark.asyncio
    async def test_missing_id_token_is_exchange_failure(self, verifier):
        response = _token_response(200, {"access_token": "ya29.token"})

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(ExchangeFailedError):
                await verifier.verify(GoogleAuthCode(auth_code="code", player_id="p1"))

    @pytest.mark.asyncio
    async def test_non_json_body_is_exchange_failure(self, verifier):
        response = _token_response(200, {})
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(ExchangeFailedError, match="non-JSON"):
                await verifier.verify(GoogleAuthCode(auth_code="code", player_id="p1"))

    @pytest.mark.asyncio
    async def test_rejected_code_is_exchange_failure(self, verifier):
        response = _token_response(400, {"error": "invalid_grant"})

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(ExchangeFailedError):
                await verifier.verify(GoogleAuthCode(auth_code="used-code"))

    @pytest.mark.asyncio
    async def test_transport_error_is_exchange_failure(self, verifier):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.ConnectError("connection refused")
            )

            with pytest.raises(ExchangeFailedError):
                await verifier.verify(GoogleAuthCode(auth_code="code"))
