"""Domain layer DI providers."""

from dishka import Scope, provide

from levelup.adapter.recall.client import PlayGamesRecallBroker
from levelup.config import AuthSettings
from levelup.domain.repository import AccountRepository, PlayerRepository
from levelup.domain.service import (
    AccountService,
    IdentityVerifier,
    JWTService,
    RecallService,
    VerificationService,
)
from levelup.domain.value import IdentityProvider
from levelup.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_verification_service(
        self, verifiers: dict[IdentityProvider, IdentityVerifier]
    ) -> VerificationService:
        """Provide credential verification service.

        Args:
            verifiers: Dictionary mapping providers to their verifiers
        """
        return VerificationService(verifiers=verifiers)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_recall_service(
        self, recall_broker: PlayGamesRecallBroker, player_repository: PlayerRepository
    ) -> RecallService:
        """Provide recall domain service."""
        return RecallService(
            recall_broker=recall_broker, player_repository=player_repository
        )
