"""Application layer DI providers."""

from dishka import Scope, provide

from levelup.application.usecase.link import LinkAccountUseCase
from levelup.application.usecase.progress import PostCountUseCase
from levelup.application.usecase.recall import (
    CreateAccountUseCase,
    RecallSessionUseCase,
)
from levelup.domain.service import (
    AccountService,
    JWTService,
    RecallService,
    VerificationService,
)
from levelup.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Linking use cases
    @provide(scope=Scope.REQUEST)
    def get_link_account_use_case(
        self,
        verification_service: VerificationService,
        account_service: AccountService,
        jwt_service: JWTService,
    ) -> LinkAccountUseCase:
        """Provide link account use case."""
        return LinkAccountUseCase(
            verification_service=verification_service,
            account_service=account_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_post_count_use_case(
        self, jwt_service: JWTService, account_service: AccountService
    ) -> PostCountUseCase:
        """Provide progress update use case."""
        return PostCountUseCase(jwt_service=jwt_service, account_service=account_service)

    # Recall use cases
    @provide(scope=Scope.REQUEST)
    def get_recall_session_use_case(
        self, recall_service: RecallService
    ) -> RecallSessionUseCase:
        """Provide recall session use case."""
        return RecallSessionUseCase(recall_service=recall_service)

    @provide(scope=Scope.REQUEST)
    def get_create_account_use_case(
        self, recall_service: RecallService
    ) -> CreateAccountUseCase:
        """Provide recall account creation use case."""
        return CreateAccountUseCase(recall_service=recall_service)
