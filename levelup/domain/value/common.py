"""Base for credential and identity value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    # Hashable, compared by value; unknown fields are rejected
    model_config = ConfigDict(frozen=True, extra="forbid")
