"""Shared configuration for stored domain records."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable record read from or written to a repository.

    Changes produce a new instance (``model_copy``) that the repository
    stores, so a value handed to a caller never changes underneath it.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)
