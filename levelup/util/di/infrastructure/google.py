"""Google infrastructure providers."""

from dishka import Scope, provide

from levelup.adapter.google.client import (
    GoogleIdentityVerifier,
    RealGoogleIdentityVerifier,
)
from levelup.config import GoogleSettings
from levelup.util.di.base import ProviderBase
from levelup.util.error import ConfigurationError


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_verifier(self, google: GoogleSettings) -> GoogleIdentityVerifier:
        """Provide Google identity verifier.

        Raises:
            ConfigurationError: If the web client credentials are not configured
        """
        missing = [
            name
            for name, value in (
                ("GOOGLE__CLIENT_ID", google.client_id),
                ("GOOGLE__CLIENT_SECRET", google.client_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError("Google web client is not configured", missing)

        return RealGoogleIdentityVerifier(
            client_id=google.client_id,
            client_secret=google.client_secret,
            redirect_uri=google.redirect_uri,
            token_url=google.token_url,
            jwks_url=google.jwks_url,
            issuers=google.issuers,
        )
