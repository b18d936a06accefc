"""Third-party credential verification domain service."""

import logfire

from levelup.domain.error import InvalidCredentialError
from levelup.domain.value import IdentityProvider, ProviderCredential, VerifiedIdentity

from .base import Service


class IdentityVerifier:
    """Generic verifier interface implemented once per identity provider."""

    async def verify(self, credential: ProviderCredential) -> VerifiedIdentity:
        """Validate a credential with the provider that issued it.

        Args:
            credential: Provider-specific credential

        Returns:
            Verified identity with optional profile attributes

        Raises:
            InvalidCredentialError: If the provider rejects the credential
            ExchangeFailedError: If a code exchange yields no token
        """
        raise NotImplementedError


class VerificationService(Service):
    """Routes each credential to the verifier for its provider."""

    def __init__(self, verifiers: dict[IdentityProvider, IdentityVerifier]) -> None:
        """Initialize verification service.

        Args:
            verifiers: Map of provider to verifier implementation
        """
        self.verifiers = verifiers

    async def verify(self, credential: ProviderCredential) -> VerifiedIdentity:
        """Verify a credential of any supported kind.

        Args:
            credential: Google ID token, Google auth code or Facebook token

        Returns:
            Verified identity

        Raises:
            InvalidCredentialError: If no verifier handles the provider, or
                the provider rejects the credential
            ExchangeFailedError: If a code exchange yields no token
        """
        provider = credential.provider
        verifier = self.verifiers.get(provider)
        if not verifier:
            raise InvalidCredentialError(f"Unsupported provider: {provider.value}")

        with logfire.span(
            "verification_service.verify",
            provider=provider.value,
            credential_type=type(credential).__name__,
        ):
            try:
                verified = await verifier.verify(credential)
            except Exception as e:
                logfire.warn(
                    "Credential rejected", provider=provider.value, error=str(e)
                )
                raise

            logfire.info(
                "Credential verified",
                provider=provider.value,
                identity_key=verified.identity.key,
                has_email=bool(verified.email),
            )
            return verified
