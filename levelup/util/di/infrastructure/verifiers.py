"""Verifier aggregation provider for multi-provider linking."""

from dishka import Scope, provide

from levelup.adapter.facebook.client import FacebookIdentityVerifier
from levelup.adapter.google.client import GoogleIdentityVerifier
from levelup.domain.service.verification_service import IdentityVerifier
from levelup.domain.value import IdentityProvider
from levelup.util.di.base import ProviderBase


class VerifierAggregatorProvider(ProviderBase):
    """Provider that aggregates all identity verifiers into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_verifiers(
        self,
        google_verifier: GoogleIdentityVerifier,
        facebook_verifier: FacebookIdentityVerifier,
    ) -> dict[IdentityProvider, IdentityVerifier]:
        """Provide dictionary of all identity verifiers by provider.

        Args:
            google_verifier: Google verifier (specific type)
            facebook_verifier: Facebook verifier (specific type)

        Returns:
            Dictionary mapping IdentityProvider to IdentityVerifier
        """
        return {
            IdentityProvider.GOOGLE: google_verifier,
            IdentityProvider.FACEBOOK: facebook_verifier,
        }
