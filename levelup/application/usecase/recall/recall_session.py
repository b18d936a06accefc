"""Look up a recall session."""

from datetime import datetime

from pydantic import BaseModel

from levelup.application.usecase.base import BaseUseCase
from levelup.domain.model import PlayerProfile
from levelup.domain.service import RecallService
from levelup.domain.value import RecallSessionId, RecallStatus


class PlayerData(BaseModel):
    """Profile fields returned to the client."""

    username: str
    coins_owned: int
    distance_traveled: int
    created_at: datetime

    @classmethod
    def from_profile(cls, profile: PlayerProfile) -> "PlayerData":
        return cls(
            username=profile.username,
            coins_owned=profile.coins_owned,
            distance_traveled=profile.distance_traveled,
            created_at=profile.created_at,
        )


class RecallSessionRequest(BaseModel):
    """Recall session request."""

    session_id: str


class RecallSessionResponse(BaseModel):
    """Recall session response."""

    status: RecallStatus
    player_data: PlayerData | None = None


class RecallSessionUseCase(BaseUseCase[RecallSessionRequest, RecallSessionResponse]):
    """Use case for restoring a profile from a recall session."""

    def __init__(self, recall_service: RecallService) -> None:
        """Initialize recall session use case.

        Args:
            recall_service: Recall domain service
        """
        self.recall_service = recall_service

    async def execute(self, request: RecallSessionRequest) -> RecallSessionResponse:
        """Execute recall lookup.

        Returns:
            NewPlayer, AccountFound with the profile, or OrphanedToken

        Raises:
            UpstreamUnavailableError: If the broker cannot be reached
        """
        outcome = await self.recall_service.recall(RecallSessionId(request.session_id))

        player_data = None
        if outcome.profile:
            player_data = PlayerData.from_profile(outcome.profile)

        return RecallSessionResponse(status=outcome.status, player_data=player_data)
