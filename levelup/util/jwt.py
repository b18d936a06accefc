"""Session credential (JWT) utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from levelup.config import AuthSettings
from levelup.util.error import ConfigurationError


class SessionClaims(BaseModel):
    """Claims carried by a session credential."""

    player_id: str
    account_id: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenExpiredError(JWTError):
    """Token signature is valid but its validity window has passed."""

    pass


def create_token(player_id: str, account_id: str, settings: AuthSettings) -> str:
    """Create a signed session token.

    Args:
        player_id: Identity the caller linked with
        account_id: In-game account the token authorizes
        settings: Authentication settings

    Returns:
        Encoded JWT

    Raises:
        ConfigurationError: If no signing secret is configured
    """
    if not settings.jwt_secret:
        raise ConfigurationError("AUTH__JWT_SECRET is not configured")

    now = datetime.now(timezone.utc)
    payload = {
        "player_id": player_id,
        "account_id": account_id,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> SessionClaims:
    """Verify and decode a session token.

    Args:
        token: JWT to verify
        settings: Authentication settings

    Returns:
        Decoded claims

    Raises:
        TokenExpiredError: If the token has expired
        JWTError: If the token is malformed, tampered with or lacks claims
    """
    if not settings.jwt_secret:
        raise ConfigurationError("AUTH__JWT_SECRET is not configured")

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat", "player_id", "account_id"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    return SessionClaims(**payload)
