"""Facebook infrastructure providers."""

from dishka import Scope, provide

from levelup.adapter.facebook.client import (
    FacebookIdentityVerifier,
    RealFacebookIdentityVerifier,
)
from levelup.config import FacebookSettings
from levelup.util.di.base import ProviderBase
from levelup.util.error import ConfigurationError


class FacebookProvider(ProviderBase):
    """Facebook component base."""

    __mock_component__ = "facebook"


class ProdFacebookProvider(FacebookProvider):
    """Production Facebook provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_facebook_verifier(self, facebook: FacebookSettings) -> FacebookIdentityVerifier:
        """Provide Facebook identity verifier.

        Raises:
            ConfigurationError: If the app credentials are not configured
        """
        if not facebook.app_id or not facebook.app_secret:
            raise ConfigurationError(
                "Facebook app is not configured",
                ["FACEBOOK__APP_ID", "FACEBOOK__APP_SECRET"],
            )

        return RealFacebookIdentityVerifier(
            app_id=facebook.app_id,
            app_secret=facebook.app_secret,
            graph_url=facebook.graph_url,
            profile_fields=facebook.profile_fields,
        )
