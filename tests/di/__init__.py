"""Mock providers for testing.

Persistence needs no test-only provider: the in-memory store that backs the
``memory`` backend is the mock implementation.
"""

from levelup.util.di import InMemoryPersistenceProvider

from .container import build_test_container
from .facebook import MockFacebookProvider
from .google import MockGoogleProvider
from .recall import MockRecallProvider

__all__ = [
    "InMemoryPersistenceProvider",
    "MockFacebookProvider",
    "MockGoogleProvider",
    "MockRecallProvider",
    "build_test_container",
]
