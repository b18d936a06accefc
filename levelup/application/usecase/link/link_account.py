"""Link a third-party identity to an in-game account."""

from pydantic import BaseModel

from levelup.application.usecase.base import BaseUseCase
from levelup.domain.service import AccountService, JWTService, VerificationService
from levelup.domain.value import ProviderCredential


class LinkAccountRequest(BaseModel):
    """Link account request."""

    credential: ProviderCredential


class LinkAccountResponse(BaseModel):
    """Link account response."""

    player_id: str
    email: str
    account_id: str
    count: int
    jwt_token: str
    created: bool


class LinkAccountUseCase(BaseUseCase[LinkAccountRequest, LinkAccountResponse]):
    """Use case shared by the Google token, Google auth code and Facebook flows."""

    def __init__(
        self,
        verification_service: VerificationService,
        account_service: AccountService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize link account use case.

        Args:
            verification_service: Credential verification domain service
            account_service: Account domain service
            jwt_service: JWT token domain service
        """
        self.verification_service = verification_service
        self.account_service = account_service
        self.jwt_service = jwt_service

    async def execute(self, request: LinkAccountRequest) -> LinkAccountResponse:
        """Execute linking flow.

        Steps:
        1. Verify the credential with its provider (network round-trips)
        2. Find or create the account for the verified identity
        3. Issue a session token for the account

        Verification must finish before step 2 starts; the account lookup
        and creation are never interleaved with a provider call.

        Args:
            request: Request with a provider credential

        Returns:
            Account id, current progress and a session token

        Raises:
            InvalidCredentialError: If the provider rejects the credential
            ExchangeFailedError: If an auth code yields no ID token
        """
        verified = await self.verification_service.verify(request.credential)

        account, created = await self.account_service.link(verified.identity)

        token = self.jwt_service.create_token(verified.player_id, account.id)

        return LinkAccountResponse(
            player_id=verified.player_id,
            email=verified.email or "",
            account_id=account.id,
            count=account.progress,
            jwt_token=token,
            created=created,
        )
