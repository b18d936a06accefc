"""Repository interfaces for the LevelUp domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from levelup.domain.repository.account import AccountRepository
from levelup.domain.repository.player import PlayerRepository

__all__ = [
    "AccountRepository",
    "PlayerRepository",
]
