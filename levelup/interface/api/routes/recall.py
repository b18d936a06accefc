"""Recall routes.

Errors from this router use the ``{"status": "error", "message": ...}``
body that game clients of the recall service expect.
"""

import logging
from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from levelup.application.usecase.recall import (
    CreateAccountRequest,
    CreateAccountUseCase,
    PlayerData,
    RecallSessionRequest,
    RecallSessionUseCase,
)
from levelup.domain.model.player import USERNAME_MAX_LENGTH
from levelup.domain.value import RecallStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recall"], route_class=DishkaRoute)


class RecallSessionAPIRequest(BaseModel):
    """Body of ``/recall-session``."""

    token: str | None = None  # Broker session id obtained on-device


class CreateAccountAPIRequest(BaseModel):
    """Body of ``/create-account``."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(None, alias="recallSessionId")
    username: str | None = None


class PlayerDataAPI(BaseModel):
    """Profile as sent to game clients."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    coins_owned: int = Field(alias="coinsOwned")
    distance_traveled: int = Field(alias="distanceTraveled")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_data(cls, data: PlayerData) -> "PlayerDataAPI":
        return cls(
            username=data.username,
            coins_owned=data.coins_owned,
            distance_traveled=data.distance_traveled,
            created_at=data.created_at,
        )


class RecallAPIResponse(BaseModel):
    """Recall lookup or creation result."""

    model_config = ConfigDict(populate_by_name=True)

    status: RecallStatus
    player_data: PlayerDataAPI | None = Field(None, alias="playerData")


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@router.post(
    "/recall-session",
    response_model=RecallAPIResponse,
    response_model_exclude_none=True,
)
async def recall_session(
    recall_session_use_case: FromDishka[RecallSessionUseCase],
    request: RecallSessionAPIRequest | None = None,
) -> RecallAPIResponse:
    """Restore a profile from a recall session.

    Example:
        POST /recall-session
        {"token": "<recall session id>"}

        Response:
        {"status": "AccountFound", "playerData": {"username": "alice", ...}}

    ``NewPlayer`` means the broker knows no token for this player.
    ``OrphanedToken`` means the broker has a token this service never
    stored; the client must not create a second account behind it.
    """
    if not request or not request.token:
        raise _bad_request("Missing required fields: token")

    result = await recall_session_use_case.execute(
        RecallSessionRequest(session_id=request.token)
    )
    logger.info(f"Recall session resolved: {result.status.value}")

    return RecallAPIResponse(
        status=result.status,
        player_data=PlayerDataAPI.from_data(result.player_data)
        if result.player_data
        else None,
    )


@router.post(
    "/create-account",
    response_model=RecallAPIResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(
    create_account_use_case: FromDishka[CreateAccountUseCase],
    request: CreateAccountAPIRequest | None = None,
) -> RecallAPIResponse:
    """Create a profile and link it to the player behind the session.

    Example:
        POST /create-account
        {"recallSessionId": "<recall session id>", "username": "alice"}

        Response (201):
        {
            "status": "AccountCreated",
            "playerData": {
                "username": "alice",
                "coinsOwned": 1,
                "distanceTraveled": 100,
                "createdAt": "2025-01-15T12:34:56Z"
            }
        }
    """
    if not request:
        raise _bad_request("Missing required fields: recallSessionId, username")
    missing = [
        name
        for name, value in (
            ("recallSessionId", request.session_id),
            ("username", request.username),
        )
        if not value
    ]
    if missing:
        raise _bad_request(f"Missing required fields: {', '.join(missing)}")
    if len(request.username) > USERNAME_MAX_LENGTH:
        raise _bad_request(f"username must be at most {USERNAME_MAX_LENGTH} characters")

    result = await create_account_use_case.execute(
        CreateAccountRequest(session_id=request.session_id, username=request.username)
    )
    logger.info(f"Recall account created for {result.player_data.username}")

    return RecallAPIResponse(
        status=result.status,
        player_data=PlayerDataAPI.from_data(result.player_data),
    )
