"""Create a profile behind a recall session."""

from pydantic import BaseModel

from levelup.application.usecase.base import BaseUseCase
from levelup.domain.service import RecallService
from levelup.domain.value import RecallSessionId, RecallStatus

from .recall_session import PlayerData


class CreateAccountRequest(BaseModel):
    """Create account request."""

    session_id: str
    username: str


class CreateAccountResponse(BaseModel):
    """Create account response."""

    status: RecallStatus = RecallStatus.ACCOUNT_CREATED
    player_data: PlayerData


class CreateAccountUseCase(BaseUseCase[CreateAccountRequest, CreateAccountResponse]):
    """Use case for provisioning a new recall-linked profile."""

    def __init__(self, recall_service: RecallService) -> None:
        self.recall_service = recall_service

    async def execute(self, request: CreateAccountRequest) -> CreateAccountResponse:
        """Register a fresh token with the broker and store a starting profile.

        Raises:
            UpstreamUnavailableError: If the broker rejects the link
        """
        profile = await self.recall_service.create_account(
            RecallSessionId(request.session_id), request.username
        )
        return CreateAccountResponse(player_data=PlayerData.from_profile(profile))
