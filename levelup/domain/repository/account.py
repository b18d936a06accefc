"""Account repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional

from levelup.domain.model.account import Account
from levelup.domain.value import AccountId


class AccountRepository(ABC):
    """Repository for the Account aggregate and its identity mapping.

    The mapping from identity key to account is created once and never
    deleted. Implementations must guarantee that concurrent calls to
    ``link_identity`` for the same key yield a single account.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: In-game account id

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_identity(self, identity_key: str) -> Optional[Account]:
        """Find the account linked to an identity key.

        Args:
            identity_key: Provider-qualified identity key

        Returns:
            The linked account if any, None otherwise
        """
        pass

    @abstractmethod
    async def link_identity(self, identity_key: str) -> tuple[Account, bool]:
        """Return the account linked to ``identity_key``, creating it if absent.

        A new account gets the next account number and zero progress.

        Args:
            identity_key: Provider-qualified identity key

        Returns:
            The account, and True if this call created it
        """
        pass

    @abstractmethod
    async def update(
        self, account_id: AccountId, fn: Callable[[Account], Account]
    ) -> Optional[Account]:
        """Replace an account with ``fn(current)``.

        Args:
            account_id: Account to update
            fn: Pure function producing the new state from the current one

        Returns:
            The updated account, or None if it does not exist
        """
        pass
