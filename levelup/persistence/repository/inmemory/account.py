"""In-memory account repository."""

from collections.abc import Callable
from itertools import count
from typing import Optional

from levelup.domain.model.account import FIRST_ACCOUNT_NUMBER, Account
from levelup.domain.repository.account import AccountRepository
from levelup.domain.value import AccountId


class InMemoryAccountRepository(AccountRepository):
    """Process-local implementation of AccountRepository.

    Shared by every request in the process. Mutating methods never await, so
    on a single event loop each one runs to completion before another
    request can observe the maps.
    """

    def __init__(self, first_number: int = FIRST_ACCOUNT_NUMBER) -> None:
        self._accounts: dict[AccountId, Account] = {}
        self._links: dict[str, AccountId] = {}
        self._numbers = count(first_number)

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_identity(self, identity_key: str) -> Optional[Account]:
        """Find the account linked to an identity key."""
        account_id = self._links.get(identity_key)
        if account_id is None:
            return None
        return self._accounts.get(account_id)

    async def link_identity(self, identity_key: str) -> tuple[Account, bool]:
        """Return the linked account, creating it if absent."""
        account_id = self._links.get(identity_key)
        if account_id is not None:
            return self._accounts[account_id], False

        account = Account.open(next(self._numbers), identity_key)
        self._accounts[account.id] = account
        self._links[identity_key] = account.id
        return account, True

    async def update(
        self, account_id: AccountId, fn: Callable[[Account], Account]
    ) -> Optional[Account]:
        """Replace an account with ``fn(current)``."""
        account = self._accounts.get(account_id)
        if not account:
            return None
        updated = fn(account)
        self._accounts[account_id] = updated
        return updated
