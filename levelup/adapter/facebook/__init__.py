"""Facebook identity adapter."""

from .client import (
    FacebookIdentityVerifier,
    MockFacebookIdentityVerifier,
    RealFacebookIdentityVerifier,
)

__all__ = [
    "FacebookIdentityVerifier",
    "MockFacebookIdentityVerifier",
    "RealFacebookIdentityVerifier",
]
