"""Unit tests for the Play Games recall broker client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from levelup.adapter.error import UpstreamUnavailableError
from levelup.adapter.recall.client import RealPlayGamesRecallBroker


def _response(status_code: int, body: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body or {}
    response.text = str(body)
    return response


@pytest.fixture
def broker() -> RealPlayGamesRecallBroker:
    token_source = MagicMock()
    token_source.get_access_token = AsyncMock(return_value="ya29.service")
    return RealPlayGamesRecallBroker(token_source=token_source)


class TestFindTokens:
    """Tests for find_tokens()."""

    @pytest.mark.asyncio
    async def test_returns_tokens(self, broker):
        body = {"tokens": [{"token": "t-1", "multiPlayerPersona": False}, {"token": "t-2"}]}

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=_response(200, body))
            mock_client.return_value.__aenter__.return_value.get = get

            tokens = await broker.find_tokens("session/with+chars")

        assert tokens == ["t-1", "t-2"]
        assert get.call_args.args[0] == (
            "https://games.googleapis.com/games/v1/recall/tokens/session%2Fwith%2Bchars"
        )
        assert get.call_args.kwargs["headers"]["Authorization"] == "Bearer ya29.service"

    @pytest.mark.asyncio
    async def test_not_found_means_no_tokens(self, broker):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(404)
            )

            assert await broker.find_tokens("session-1") == []

    @pytest.mark.asyncio
    async def test_server_error_raises(self, broker):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(503)
            )

            with pytest.raises(UpstreamUnavailableError):
                await broker.find_tokens("session-1")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, broker):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("unreachable")
            )

            with pytest.raises(UpstreamUnavailableError):
                await broker.find_tokens("session-1")


    @pytest.mark.asyncio
    async def test_non_json_body_raises(self, broker):
        page = _response(200)
        page.json.side_effect = ValueError("Expecting value")

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(return_value=page)

            with pytest.raises(UpstreamUnavailableError):
                await broker.find_tokens("session-1")

    @pytest.mark.asyncio
    async def test_malformed_entries_are_skipped(self, broker):
        body = {"tokens": ["bare-string", {"token": "t-1"}, {"persona": "p"}]}

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(200, body)
            )

            assert await broker.find_tokens("session-1") == ["t-1"]


class TestLinkPersona:
    """Tests for link_persona()."""

    @pytest.mark.asyncio
    async def test_posts_link_request(self, broker):
        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=_response(200, {}))
            mock_client.return_value.__aenter__.return_value.post = post

            await broker.link_persona("session-1", "persona-1", "token-1")

        assert post.call_args.args[0] == (
            "https://games.googleapis.com/games/v1/recall:linkPersona"
        )
        assert post.call_args.kwargs["json"] == {
            "sessionId": "session-1",
            "persona": "persona-1",
            "token": "token-1",
            "conflictingLinksResolutionPolicy": "CREATE_NEW_LINK",
        }

    @pytest.mark.asyncio
    async def test_rejection_raises(self, broker):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=_response(400, {"error": "bad session"})
            )

            with pytest.raises(UpstreamUnavailableError, match="Failed to link new persona"):
                await broker.link_persona("session-1", "p", "t")
