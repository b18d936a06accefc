"""Identity linking routes.

All three endpoints share one flow: verify the credential, then find or
create the account, then issue a session token.
"""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from levelup.application.usecase.link import (
    LinkAccountRequest,
    LinkAccountResponse,
    LinkAccountUseCase,
)
from levelup.domain.value import (
    FacebookAccessToken,
    GoogleAuthCode,
    GoogleIdToken,
    ProviderCredential,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["linking"], route_class=DishkaRoute)


class GoogleTokenLinkRequest(BaseModel):
    """Body of ``/verify_and_link_google``."""

    model_config = ConfigDict(populate_by_name=True)

    id_token: str | None = Field(None, alias="idToken")
    player_id: str | None = Field(None, alias="playerID")


class GoogleAuthCodeLinkRequest(BaseModel):
    """Body of ``/exchange_authcode_and_link``."""

    model_config = ConfigDict(populate_by_name=True)

    auth_code: str | None = Field(None, alias="authCode")
    player_id: str | None = Field(None, alias="playerID")


class FacebookLinkRequest(BaseModel):
    """Body of ``/verify_and_link_facebook``."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str | None = Field(None, alias="accessToken")


class LinkAPIResponse(BaseModel):
    """Linked account and session token."""

    model_config = ConfigDict(populate_by_name=True)

    player_id: str = Field(alias="playerID")
    email: str
    account_id: str = Field(alias="inGameAccountID")
    count: int = Field(alias="inGameCount")
    jwt_token: str = Field(alias="jwtToken")

    @classmethod
    def from_result(cls, result: LinkAccountResponse) -> "LinkAPIResponse":
        return cls(
            player_id=result.player_id,
            email=result.email,
            account_id=result.account_id,
            count=result.count,
            jwt_token=result.jwt_token,
        )


def _missing(**fields: str | None) -> None:
    absent = [name for name, value in fields.items() if not value]
    if absent:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(absent)}",
        )


async def _link(
    use_case: LinkAccountUseCase, credential: ProviderCredential
) -> LinkAPIResponse:
    result = await use_case.execute(LinkAccountRequest(credential=credential))
    logger.info(
        f"Linked {credential.provider.value} identity to {result.account_id} "
        f"(created={result.created})"
    )
    return LinkAPIResponse.from_result(result)


@router.post("/verify_and_link_google", response_model=LinkAPIResponse)
async def verify_and_link_google(
    request: GoogleTokenLinkRequest,
    link_account_use_case: FromDishka[LinkAccountUseCase],
) -> LinkAPIResponse:
    """Link a Google ID token obtained on-device.

    Example:
        POST /verify_and_link_google
        {"idToken": "eyJ...", "playerID": "a_8734"}

        Response:
        {
            "playerID": "a_8734",
            "email": "player@example.com",
            "inGameAccountID": "ingame-1001",
            "inGameCount": 0,
            "jwtToken": "eyJ..."
        }
    """
    _missing(idToken=request.id_token, playerID=request.player_id)
    return await _link(
        link_account_use_case,
        GoogleIdToken(id_token=request.id_token, player_id=request.player_id),
    )


@router.post("/exchange_authcode_and_link", response_model=LinkAPIResponse)
async def exchange_authcode_and_link(
    request: GoogleAuthCodeLinkRequest,
    link_account_use_case: FromDishka[LinkAccountUseCase],
) -> LinkAPIResponse:
    """Exchange a Google server auth code and link the resulting identity.

    ``playerID`` is optional; without it the account is keyed on the
    Google subject.
    """
    _missing(authCode=request.auth_code)
    return await _link(
        link_account_use_case,
        GoogleAuthCode(auth_code=request.auth_code, player_id=request.player_id or None),
    )


@router.post("/verify_and_link_facebook", response_model=LinkAPIResponse)
async def verify_and_link_facebook(
    request: FacebookLinkRequest,
    link_account_use_case: FromDishka[LinkAccountUseCase],
) -> LinkAPIResponse:
    """Link a Facebook user access token."""
    _missing(accessToken=request.access_token)
    return await _link(
        link_account_use_case, FacebookAccessToken(access_token=request.access_token)
    )
