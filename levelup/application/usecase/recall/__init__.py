"""Recall use cases."""

from .create_account import (
    CreateAccountRequest,
    CreateAccountResponse,
    CreateAccountUseCase,
)
from .recall_session import (
    PlayerData,
    RecallSessionRequest,
    RecallSessionResponse,
    RecallSessionUseCase,
)

__all__ = [
    "CreateAccountRequest",
    "CreateAccountResponse",
    "CreateAccountUseCase",
    "PlayerData",
    "RecallSessionRequest",
    "RecallSessionResponse",
    "RecallSessionUseCase",
]
