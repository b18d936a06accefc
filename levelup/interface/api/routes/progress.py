"""Progress routes (Bearer-authenticated)."""

import logging
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict, Field

from levelup.application.usecase.progress import PostCountRequest, PostCountUseCase

logger = logging.getLogger(__name__)

router = APIRouter(tags=["progress"], route_class=DishkaRoute)

# auto_error=False so a missing header is answered with 401, not 403
bearer = HTTPBearer(auto_error=False)


class PostCountAPIRequest(BaseModel):
    """Body of ``/post_count``; ``count`` is validated after authentication."""

    count: Any = None


class PostCountAPIResponse(BaseModel):
    """Account state after the overwrite."""

    model_config = ConfigDict(populate_by_name=True)

    player_id: str = Field(alias="playerID")
    email: str = ""
    account_id: str = Field(alias="inGameAccountID")
    count: int = Field(alias="inGameCount")


@router.post("/post_count", response_model=PostCountAPIResponse)
async def post_count(
    post_count_use_case: FromDishka[PostCountUseCase],
    request: PostCountAPIRequest | None = None,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> PostCountAPIResponse:
    """Overwrite the progress counter of the account in the session token.

    Example:
        POST /post_count
        Authorization: Bearer eyJ...
        {"count": 42}

        Response:
        {"playerID": "a_8734", "email": "", "inGameAccountID": "ingame-1001", "inGameCount": 42}
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await post_count_use_case.execute(
        PostCountRequest(
            token=credentials.credentials, count=request.count if request else None
        )
    )
    logger.info(f"Progress for {result.account_id} set to {result.count}")

    return PostCountAPIResponse(
        player_id=result.player_id,
        account_id=result.account_id,
        count=result.count,
    )
