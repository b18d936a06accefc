"""Domain value objects for LevelUp."""

from levelup.domain.value.identifiers import (
    ACCOUNT_ID_PREFIX,
    AccountId,
    RecallSessionId,
    RecallToken,
    account_id_for,
)
from levelup.domain.value.types import (
    ExternalIdentity,
    FacebookAccessToken,
    GoogleAuthCode,
    GoogleIdToken,
    IdentityProvider,
    ProviderCredential,
    RecallStatus,
    VerifiedIdentity,
)

__all__ = [
    # Identifiers
    "ACCOUNT_ID_PREFIX",
    "AccountId",
    "RecallSessionId",
    "RecallToken",
    "account_id_for",
    # Types
    "ExternalIdentity",
    "FacebookAccessToken",
    "GoogleAuthCode",
    "GoogleIdToken",
    "IdentityProvider",
    "ProviderCredential",
    "RecallStatus",
    "VerifiedIdentity",
]
