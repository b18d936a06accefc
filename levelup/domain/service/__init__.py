"""Domain services."""

from .account_service import AccountService
from .base import Service
from .jwt_service import JWTService
from .recall_service import RecallBroker, RecallOutcome, RecallService
from .verification_service import IdentityVerifier, VerificationService

__all__ = [
    "AccountService",
    "IdentityVerifier",
    "JWTService",
    "RecallBroker",
    "RecallOutcome",
    "RecallService",
    "Service",
    "VerificationService",
]
