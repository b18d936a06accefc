"""Integration tests for PostgresPlayerRepository."""

import pytest

from levelup.domain.model import PlayerProfile
from levelup.domain.repository import PlayerRepository
from levelup.domain.value import RecallToken
from tests.harness import create_database_fixture, create_env_fixture

clean_database = create_database_fixture()
integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresPlayerRepository:
    """Recall profiles keyed by durable token."""

    @pytest.mark.asyncio
    async def test_insert_then_find(self, integration_env):
        repo = await integration_env.get(PlayerRepository)
        token = RecallToken("6f1c2a44-0d5e-4c43-9a34-2b7f6c1e9d10")

        _, created = await repo.insert_if_absent(
            token, PlayerProfile(username="alice")
        )
        found = await repo.find_by_token(token)

        assert created
        assert found.username == "alice"
        assert found.coins_owned == 1
        assert found.distance_traveled == 100

    @pytest.mark.asyncio
    async def test_second_insert_keeps_first_profile(self, integration_env):
        repo = await integration_env.get(PlayerRepository)
        token = RecallToken("0b8e5f0e-7f8a-4d2c-8d0c-5f1b9a2e3c44")

        await repo.insert_if_absent(token, PlayerProfile(username="alice"))
        existing, created = await repo.insert_if_absent(
            token, PlayerProfile(username="mallory")
        )

        assert not created
        assert existing.username == "alice"

    @pytest.mark.asyncio
    async def test_unknown_token(self, integration_env):
        repo = await integration_env.get(PlayerRepository)

        assert await repo.find_by_token(RecallToken("missing")) is None
