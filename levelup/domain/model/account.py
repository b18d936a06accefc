"""In-game account aggregate.

An account is created the first time an external identity is linked and
carries the player's progress counter.
"""

from datetime import datetime, timezone

from pydantic import Field, model_validator

from levelup.domain.model.common import DomainModel
from levelup.domain.value import AccountId, account_id_for

# Numbers below this are never handed out
FIRST_ACCOUNT_NUMBER = 1001


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(DomainModel):
    """In-game account linked to exactly one external identity."""

    id: AccountId
    number: int = Field(ge=FIRST_ACCOUNT_NUMBER)
    identity_key: str
    progress: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def check_id_matches_number(self) -> "Account":
        """Account id is derived from the number and must agree with it."""
        if self.id != account_id_for(self.number):
            raise ValueError(f"Account id {self.id} does not match number {self.number}")
        return self

    @classmethod
    def open(cls, number: int, identity_key: str) -> "Account":
        """Create a zero-progress account for a freshly allocated number."""
        return cls(id=account_id_for(number), number=number, identity_key=identity_key)

    def with_progress(self, count: int) -> "Account":
        """Return a copy with the progress counter overwritten."""
        return self.model_copy(update={"progress": count, "updated_at": _utcnow()})
