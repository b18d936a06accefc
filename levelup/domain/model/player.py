"""Player profile stored by the recall service."""

from datetime import datetime, timezone

from pydantic import Field

from levelup.domain.model.common import DomainModel

STARTING_COINS = 1
STARTING_DISTANCE = 100
USERNAME_MAX_LENGTH = 64


class PlayerProfile(DomainModel):
    """Profile restored on any device the broker recognises."""

    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    coins_owned: int = STARTING_COINS
    distance_traveled: int = STARTING_DISTANCE
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
