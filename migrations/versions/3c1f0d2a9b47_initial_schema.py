"""initial_schema

Create the account store schema:
- Accounts (ingame-<number>, numbers from a sequence starting at 1001)
- Identity links (provider-qualified identity key -> account, one-to-one)
- Recall players (profiles keyed by durable recall token)

Revision ID: 3c1f0d2a9b47
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0d2a9b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("CREATE SEQUENCE IF NOT EXISTS account_number_seq START WITH 1001")

    # ========================================================================
    # ACCOUNTS TABLE
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("number", sa.BigInteger(), nullable=False),
        sa.Column("identity_key", sa.String(255), nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("number", name="uq_accounts_number"),
        sa.UniqueConstraint("identity_key", name="uq_accounts_identity_key"),
    )

    # ========================================================================
    # IDENTITY LINKS TABLE
    # ========================================================================
    op.create_table(
        "identity_links",
        sa.Column("identity_key", sa.String(255), primary_key=True),
        sa.Column("account_id", sa.String(64), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("account_id", name="uq_identity_links_account_id"),
        sa.ForeignKeyConstraint(
            ["account_id"],
            ["accounts.id"],
            name="fk_identity_links_account",
            deferrable=True,
            initially="DEFERRED",
        ),
    )

    # ========================================================================
    # RECALL PLAYERS TABLE
    # ========================================================================
    op.create_table(
        "recall_players",
        sa.Column("token", sa.String(64), primary_key=True),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("coins_owned", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "distance_traveled", sa.Integer(), nullable=False, server_default="100"
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint("coins_owned >= 0", name="ck_recall_players_coins"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("recall_players")
    op.drop_table("identity_links")
    op.drop_table("accounts")
    op.execute("DROP SEQUENCE IF EXISTS account_number_seq")
