"""Account repository implementation using PostgreSQL."""

from collections.abc import Callable
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from levelup.domain.model.account import Account
from levelup.domain.repository.account import AccountRepository
from levelup.domain.value import AccountId, account_id_for
from levelup.persistence.mappers import account_to_dict, row_to_account
from levelup.persistence.tables import (
    account_number_seq,
    accounts_table,
    identity_links_table,
)


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository.

    At-most-one account per identity is enforced by the primary key on
    ``identity_links.identity_key``: the link is claimed with
    ``INSERT ... ON CONFLICT DO NOTHING`` before the account row is written.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Get account by ID."""
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_account(dict(row))

    async def find_by_identity(self, identity_key: str) -> Optional[Account]:
        """Get the account linked to an identity key."""
        stmt = (
            select(accounts_table)
            .join(
                identity_links_table,
                identity_links_table.c.account_id == accounts_table.c.id,
            )
            .where(identity_links_table.c.identity_key == identity_key)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_account(dict(row))

    async def link_identity(self, identity_key: str) -> tuple[Account, bool]:
        """Return the linked account, creating it if absent.

        A concurrent transaction claiming the same key makes our insert wait
        on the unique index and then do nothing; we then read its account.
        """
        existing = await self.find_by_identity(identity_key)
        if existing:
            return existing, False

        number = await self.session.scalar(select(account_number_seq.next_value()))
        account = Account.open(number, identity_key)

        claim = (
            pg_insert(identity_links_table)
            .values(identity_key=identity_key, account_id=account_id_for(number))
            .on_conflict_do_nothing(index_elements=["identity_key"])
            .returning(identity_links_table.c.account_id)
        )
        claimed = (await self.session.execute(claim)).scalar_one_or_none()

        if claimed is None:
            winner = await self.find_by_identity(identity_key)
            if winner is None:
                raise RuntimeError(f"Identity link vanished for {identity_key}")
            return winner, False

        await self.session.execute(
            accounts_table.insert().values(**account_to_dict(account))
        )
        await self.session.flush()
        return account, True

    async def update(
        self, account_id: AccountId, fn: Callable[[Account], Account]
    ) -> Optional[Account]:
        """Replace an account with ``fn(current)`` under a row lock."""
        stmt = (
            select(accounts_table)
            .where(accounts_table.c.id == account_id)
            .with_for_update()
        )
        row = (await self.session.execute(stmt)).mappings().first()
        if not row:
            return None

        updated = fn(row_to_account(dict(row)))
        await self.session.execute(
            accounts_table.update()
            .where(accounts_table.c.id == account_id)
            .values(progress=updated.progress, updated_at=updated.updated_at)
        )
        await self.session.flush()
        return updated
