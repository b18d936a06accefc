"""Unit tests for LinkAccountUseCase."""

import asyncio
import re

from dishka import AsyncContainer
import pytest

from levelup.adapter.facebook.client import MockFacebookIdentityVerifier
from levelup.application.usecase.link import LinkAccountRequest, LinkAccountUseCase
from levelup.domain.error import InvalidCredentialError
from levelup.domain.repository import AccountRepository
from levelup.domain.service import JWTService
from levelup.domain.value import FacebookAccessToken, GoogleAuthCode, GoogleIdToken
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestLinkAccountUseCase:
    """Tests for LinkAccountUseCase."""

    @pytest.mark.asyncio
    async def test_google_link_issues_token_for_new_account(self, unit_env: AsyncContainer):
        """First link creates an ingame account and a session token."""
        use_case = await unit_env.get(LinkAccountUseCase)
        jwt_service = await unit_env.get(JWTService)

        response = await use_case.execute(
            LinkAccountRequest(credential=GoogleIdToken(id_token="valid", player_id="p1"))
        )

        assert response.created is True
        assert re.fullmatch(r"ingame-\d+", response.account_id)
        assert response.count == 0
        assert response.player_id == "p1"
        claims = jwt_service.verify_token(response.jwt_token)
        assert claims.account_id == response.account_id
        assert claims.player_id == "p1"

    @pytest.mark.asyncio
    async def test_same_player_id_links_same_account(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LinkAccountUseCase)
        credential = GoogleIdToken(id_token="valid", player_id="p1")

        first = await use_case.execute(LinkAccountRequest(credential=credential))
        second = await use_case.execute(LinkAccountRequest(credential=credential))

        assert second.account_id == first.account_id
        assert second.created is False

    @pytest.mark.asyncio
    async def test_token_and_auth_code_share_account(self, unit_env: AsyncContainer):
        """Both Google flows key on the same playerID."""
        use_case = await unit_env.get(LinkAccountUseCase)

        by_token = await use_case.execute(
            LinkAccountRequest(credential=GoogleIdToken(id_token="valid", player_id="p1"))
        )
        by_code = await use_case.execute(
            LinkAccountRequest(credential=GoogleAuthCode(auth_code="code", player_id="p1"))
        )

        assert by_code.account_id == by_token.account_id

    @pytest.mark.asyncio
    async def test_facebook_email_defaults_to_empty(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LinkAccountUseCase)

        response = await use_case.execute(
            LinkAccountRequest(credential=FacebookAccessToken(access_token="no-profile"))
        )

        assert response.email == ""
        assert response.player_id.startswith("fb-")

    @pytest.mark.asyncio
    async def test_rejected_credential_creates_no_account(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LinkAccountUseCase)
        accounts = await unit_env.get(AccountRepository)

        with pytest.raises(InvalidCredentialError):
            await use_case.execute(
                LinkAccountRequest(credential=FacebookAccessToken(access_token="invalid"))
            )

        user_id = MockFacebookIdentityVerifier.USER_ID
        assert await accounts.find_by_identity(f"fb-{user_id}") is None

    @pytest.mark.asyncio
    async def test_concurrent_first_links_create_one_account(self, unit_env: AsyncContainer):
        """Verification suspends; the account check-and-create must not."""
        use_case = await unit_env.get(LinkAccountUseCase)
        request = LinkAccountRequest(credential=FacebookAccessToken(access_token="user:42"))

        responses = await asyncio.gather(*(use_case.execute(request) for _ in range(10)))

        assert len({r.account_id for r in responses}) == 1
        assert sum(1 for r in responses if r.created) == 1
