"""Mappers between database rows and domain models."""

from typing import Any, Dict

from levelup.domain.model import Account, PlayerProfile
from levelup.domain.value import AccountId


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model."""
    return Account(
        id=AccountId(row["id"]),
        number=row["number"],
        identity_key=row["identity_key"],
        progress=row["progress"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict."""
    return account.model_dump()


def row_to_player(row: Dict[str, Any]) -> PlayerProfile:
    """Convert database row to PlayerProfile domain model."""
    return PlayerProfile(
        username=row["username"],
        coins_owned=row["coins_owned"],
        distance_traveled=row["distance_traveled"],
        created_at=row["created_at"],
    )


def player_to_dict(token: str, profile: PlayerProfile) -> Dict[str, Any]:
    """Convert PlayerProfile domain model to database dict."""
    return {"token": token, **profile.model_dump()}
