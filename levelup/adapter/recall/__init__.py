"""Play Games Recall adapter."""

from .auth import ServiceAccountKey, ServiceAccountTokenSource
from .client import (
    MockPlayGamesRecallBroker,
    PlayGamesRecallBroker,
    RealPlayGamesRecallBroker,
)

__all__ = [
    "MockPlayGamesRecallBroker",
    "PlayGamesRecallBroker",
    "RealPlayGamesRecallBroker",
    "ServiceAccountKey",
    "ServiceAccountTokenSource",
]
