"""Domain model entities for LevelUp."""

from levelup.domain.model.account import FIRST_ACCOUNT_NUMBER, Account
from levelup.domain.model.player import PlayerProfile

__all__ = [
    "Account",
    "FIRST_ACCOUNT_NUMBER",
    "PlayerProfile",
]
