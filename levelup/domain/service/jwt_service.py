"""Session credential domain service."""

import logfire

from levelup.config import AuthSettings
from levelup.util.jwt import SessionClaims, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and verifies self-contained session credentials."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, player_id: str, account_id: str) -> str:
        """Create a session token binding a player to an account.

        Args:
            player_id: Identity the player linked with
            account_id: In-game account id

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", account_id=account_id):
            token = create_token(player_id, account_id, self.auth_settings)
            logfire.info("Session token issued", account_id=account_id)
            return token

    def verify_token(self, token: str) -> SessionClaims:
        """Verify a session token and extract its claims.

        No store lookup is involved; validity depends only on the secret
        and the expiry claim.

        Args:
            token: JWT token string

        Returns:
            Session claims

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                claims = verify_token(token, self.auth_settings)
                logfire.info("Session token verified", account_id=claims.account_id)
                return claims
            except Exception as e:
                logfire.warn("Session token rejected", error=str(e))
                raise
