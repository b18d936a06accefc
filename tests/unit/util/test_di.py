"""Unit tests for provider selection."""

import pytest

from levelup.domain.repository import AccountRepository
from levelup.persistence.repository.inmemory import InMemoryAccountRepository
from levelup.util.di import (
    GoogleProvider,
    InMemoryPersistenceProvider,
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    mockable_components,
)
from tests.di import MockGoogleProvider, build_test_container


def test_component_bases_resolve_by_kind():
    assert PersistenceProvider.implementation(use_mock=True) is InMemoryPersistenceProvider
    assert PersistenceProvider.implementation(use_mock=False) is ProdPersistenceProvider
    assert GoogleProvider.implementation(use_mock=True) is MockGoogleProvider


def test_plain_providers_resolve_to_themselves():
    assert not ProdConfigProvider.is_mockable()
    assert ProdConfigProvider.implementation(use_mock=True) is ProdConfigProvider


def test_every_component_has_a_mock():
    assert mockable_components() == {"google", "facebook", "recall", "persistence"}


def test_unknown_component_rejected():
    with pytest.raises(ValueError, match="Unknown components"):
        build_test_container(unmock={"twitch"})


@pytest.mark.asyncio
async def test_in_memory_store_is_shared_across_requests():
    container = build_test_container()
    try:
        async with container() as first:
            repo_a = await first.get(AccountRepository)
        async with container() as second:
            repo_b = await second.get(AccountRepository)
    finally:
        await container.close()

    assert isinstance(repo_a, InMemoryAccountRepository)
    assert repo_a is repo_b
