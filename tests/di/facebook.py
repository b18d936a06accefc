"""Mock Facebook providers for testing."""

from dishka import Scope, provide

from levelup.adapter.facebook.client import (
    FacebookIdentityVerifier,
    MockFacebookIdentityVerifier,
)
from levelup.util.di.infrastructure.facebook import FacebookProvider


class MockFacebookProvider(FacebookProvider):
    """Mock Facebook provider using mock verifier."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_facebook_verifier(self) -> FacebookIdentityVerifier:
        """Provide mock Facebook verifier."""
        return MockFacebookIdentityVerifier()
