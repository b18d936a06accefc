"""Overwrite an account's progress counter."""

from typing import Any

from pydantic import BaseModel

from levelup.application.usecase.base import BaseUseCase
from levelup.domain.error import ValidationError
from levelup.domain.service import AccountService, JWTService
from levelup.domain.value import AccountId


class PostCountRequest(BaseModel):
    """Post count request.

    ``count`` is taken as sent by the client and checked only after the
    token, so an unauthenticated caller learns nothing about the body.
    """

    token: str  # Session JWT from the Authorization header
    count: Any = None


class PostCountResponse(BaseModel):
    """Post count response."""

    player_id: str
    account_id: str
    count: int


def parse_count(value: Any) -> int:
    """Accept integers and integer strings.

    Raises:
        ValidationError: If the value is absent or not an integer
    """
    if value is None:
        raise ValidationError("Missing required fields: count")
    # bool is an int subclass; true/false are not counts
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError("count must be an integer")


class PostCountUseCase(BaseUseCase[PostCountRequest, PostCountResponse]):
    """Use case for storing a new progress value."""

    def __init__(self, jwt_service: JWTService, account_service: AccountService) -> None:
        self.jwt_service = jwt_service
        self.account_service = account_service

    async def execute(self, request: PostCountRequest) -> PostCountResponse:
        """Verify the session token, then overwrite the counter it authorizes.

        Raises:
            JWTError: If token is invalid or expired
            ValidationError: If count is missing or not an integer
            NotFoundError: If the account in the token no longer exists
        """
        claims = self.jwt_service.verify_token(request.token)
        count = parse_count(request.count)

        account = await self.account_service.set_progress(
            AccountId(claims.account_id), count
        )

        return PostCountResponse(
            player_id=claims.player_id,
            account_id=account.id,
            count=account.progress,
        )
