"""Strongly typed identifiers for LevelUp domain entities."""

from typing import NewType

# In-game account id, always "ingame-<number>"
AccountId = NewType("AccountId", str)

# Durable token minted by this service and registered with the recall broker
RecallToken = NewType("RecallToken", str)

# Ephemeral per-device handle issued by the recall broker
RecallSessionId = NewType("RecallSessionId", str)

ACCOUNT_ID_PREFIX = "ingame-"


def account_id_for(number: int) -> AccountId:
    """Build the account id for an allocated account number."""
    return AccountId(f"{ACCOUNT_ID_PREFIX}{number}")
