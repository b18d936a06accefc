"""PostgreSQL repository implementations."""

from levelup.persistence.repository.account import PostgresAccountRepository
from levelup.persistence.repository.player import PostgresPlayerRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresPlayerRepository",
]
