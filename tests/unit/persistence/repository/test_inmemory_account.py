"""Unit tests for InMemoryAccountRepository."""

import asyncio

import pytest

from levelup.domain.value import AccountId
from levelup.persistence.repository.inmemory import InMemoryAccountRepository


class TestLinkIdentity:
    """Tests for link_identity()."""

    @pytest.mark.asyncio
    async def test_first_link_creates_account_1001(self):
        repo = InMemoryAccountRepository()

        account, created = await repo.link_identity("gpg-p1")

        assert created is True
        assert account.id == "ingame-1001"
        assert account.progress == 0

    @pytest.mark.asyncio
    async def test_second_link_returns_same_account(self):
        """Linking the same key twice should not allocate a new number."""
        repo = InMemoryAccountRepository()
        first, _ = await repo.link_identity("gpg-p1")

        second, created = await repo.link_identity("gpg-p1")

        assert created is False
        assert second.id == first.id

    @pytest.mark.asyncio
    async def test_numbers_increase_monotonically(self):
        repo = InMemoryAccountRepository()

        ids = [(await repo.link_identity(f"fb-{i}"))[0].id for i in range(3)]

        assert ids == ["ingame-1001", "ingame-1002", "ingame-1003"]

    @pytest.mark.asyncio
    async def test_concurrent_first_links_create_one_account(self):
        """Concurrent links for one identity must agree on one account."""
        repo = InMemoryAccountRepository()

        results = await asyncio.gather(*(repo.link_identity("fb-77") for _ in range(20)))

        assert len({account.id for account, _ in results}) == 1
        assert sum(1 for _, created in results if created) == 1

    @pytest.mark.asyncio
    async def test_find_by_identity(self):
        repo = InMemoryAccountRepository()
        account, _ = await repo.link_identity("fb-1")

        assert await repo.find_by_identity("fb-1") == account
        assert await repo.find_by_identity("fb-2") is None


class TestUpdate:
    """Tests for update()."""

    @pytest.mark.asyncio
    async def test_update_replaces_account(self):
        repo = InMemoryAccountRepository()
        account, _ = await repo.link_identity("fb-1")

        updated = await repo.update(account.id, lambda a: a.with_progress(5))

        assert updated.progress == 5
        assert (await repo.find_by_id(account.id)).progress == 5

    @pytest.mark.asyncio
    async def test_update_unknown_account_returns_none(self):
        repo = InMemoryAccountRepository()

        assert await repo.update(AccountId("ingame-4242"), lambda a: a) is None
