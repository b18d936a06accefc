"""Domain value objects for LevelUp.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum
from typing import ClassVar, Union

from pydantic import field_validator

from levelup.domain.value.common import ValueObject


class IdentityProvider(str, Enum):
    """Third-party identity providers an account can be linked with."""

    GOOGLE = "google"
    FACEBOOK = "facebook"


# Qualifier prepended to provider subjects so ids never collide across providers
IDENTITY_KEY_PREFIXES: dict[IdentityProvider, str] = {
    IdentityProvider.GOOGLE: "gpg",
    IdentityProvider.FACEBOOK: "fb",
}


class ExternalIdentity(ValueObject):
    """Provider-qualified identity of a player."""

    provider: IdentityProvider
    subject: str

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        """Validate subject is not blank."""
        if not v or not v.strip():
            raise ValueError("Identity subject must not be empty")
        return v

    @property
    def key(self) -> str:
        """Mapping key, e.g. ``fb-1234`` or ``gpg-a_8734``."""
        return f"{IDENTITY_KEY_PREFIXES[self.provider]}-{self.subject}"


class VerifiedIdentity(ValueObject):
    """Result of a successful credential verification."""

    identity: ExternalIdentity
    player_id: str  # Echoed to the client as playerID
    provider_subject: str  # Stable id at the provider (Google sub, Facebook user id)
    email: str | None = None


class GoogleIdToken(ValueObject):
    """Google ID token obtained on-device, plus the Play Games player id."""

    provider: ClassVar[IdentityProvider] = IdentityProvider.GOOGLE

    id_token: str
    player_id: str


class GoogleAuthCode(ValueObject):
    """One-time Google server auth code.

    Without a player id the account is keyed on the Google subject.
    """

    provider: ClassVar[IdentityProvider] = IdentityProvider.GOOGLE

    auth_code: str
    player_id: str | None = None


class FacebookAccessToken(ValueObject):
    """Opaque Facebook user access token."""

    provider: ClassVar[IdentityProvider] = IdentityProvider.FACEBOOK

    access_token: str


ProviderCredential = Union[GoogleIdToken, GoogleAuthCode, FacebookAccessToken]


class RecallStatus(str, Enum):
    """Outcome of a recall lookup or account creation."""

    NEW_PLAYER = "NewPlayer"
    ACCOUNT_FOUND = "AccountFound"
    ORPHANED_TOKEN = "OrphanedToken"
    ACCOUNT_CREATED = "AccountCreated"
