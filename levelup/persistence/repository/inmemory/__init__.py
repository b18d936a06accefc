"""In-memory repository implementations."""

from .account import InMemoryAccountRepository
from .player import InMemoryPlayerRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryPlayerRepository",
]
