"""Dependency injection module."""

from typing import Type

from levelup.util.di.application import ProdApplicationProvider
from levelup.util.di.base import Component, ProviderBase
from levelup.util.di.core import ProdConfigProvider
from levelup.util.di.domain import ProdDomainProvider
from levelup.util.di.infrastructure import (
    FacebookProvider,
    GoogleProvider,
    InMemoryPersistenceProvider,
    PersistenceProvider,
    ProdFacebookProvider,
    ProdGoogleProvider,
    ProdPersistenceProvider,
    ProdRecallProvider,
    RecallProvider,
    VerifierAggregatorProvider,
)

# Container layout shared by production and test builds. Component bases
# are resolved to one implementation each.
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    GoogleProvider,
    FacebookProvider,
    RecallProvider,
    PersistenceProvider,
    VerifierAggregatorProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation loaded."""
    return {base.__mock_component__ for base in PROVIDERS if base.is_mockable()}


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "FacebookProvider",
    "GoogleProvider",
    "PersistenceProvider",
    "RecallProvider",
    "VerifierAggregatorProvider",
    "InMemoryPersistenceProvider",
    "ProdFacebookProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
    "ProdRecallProvider",
]
