"""Account domain service."""

import logfire

from levelup.domain.error import NotFoundError
from levelup.domain.model import Account
from levelup.domain.repository import AccountRepository
from levelup.domain.value import AccountId, ExternalIdentity

from .base import Service


class AccountService(Service):
    """Maps verified identities to accounts and mutates account progress."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def link(self, identity: ExternalIdentity) -> tuple[Account, bool]:
        """Return the account for ``identity``, creating one on first link.

        Callers must finish any provider round-trips before calling this, so
        the repository's check-and-create is never split by a network wait.

        Args:
            identity: Verified, provider-qualified identity

        Returns:
            The account, and True if it was created by this call
        """
        with logfire.span(
            "account_service.link",
            provider=identity.provider.value,
            identity_key=identity.key,
        ):
            account, created = await self.account_repository.link_identity(
                identity.key
            )
            if created:
                logfire.info(
                    "New account created",
                    account_id=account.id,
                    identity_key=identity.key,
                )
            else:
                logfire.info(
                    "Existing account linked",
                    account_id=account.id,
                    identity_key=identity.key,
                )
            return account, created

    async def set_progress(self, account_id: AccountId, count: int) -> Account:
        """Overwrite an account's progress counter.

        Last write wins; repeated writes of the same value are no-ops in
        effect.

        Args:
            account_id: Account to update
            count: New counter value

        Returns:
            Updated account

        Raises:
            NotFoundError: If account not found
        """
        with logfire.span(
            "account_service.set_progress", account_id=account_id, count=count
        ):
            updated = await self.account_repository.update(
                account_id, lambda account: account.with_progress(count)
            )
            if not updated:
                logfire.warn("Progress update for unknown account", account_id=account_id)
                raise NotFoundError("Account", account_id)

            logfire.info("Progress updated", account_id=account_id, count=count)
            return updated
