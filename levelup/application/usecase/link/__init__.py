"""Identity linking use cases."""

from .link_account import LinkAccountRequest, LinkAccountResponse, LinkAccountUseCase

__all__ = ["LinkAccountRequest", "LinkAccountResponse", "LinkAccountUseCase"]
