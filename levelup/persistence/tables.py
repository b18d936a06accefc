"""SQLAlchemy table definitions for LevelUp.

These match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    ForeignKeyConstraint,
    Integer,
    MetaData,
    Sequence,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

from levelup.domain.model.account import FIRST_ACCOUNT_NUMBER

metadata = MetaData()

# Account numbers are never reused; gaps from abandoned inserts are fine
account_number_seq = Sequence(
    "account_number_seq", start=FIRST_ACCOUNT_NUMBER, metadata=metadata
)

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", String(64), primary_key=True),  # ingame-<number>
    Column("number", BigInteger, nullable=False, unique=True),
    Column("identity_key", String(255), nullable=False, unique=True),
    Column("progress", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# IDENTITY LINKS TABLE (external identity -> account, one-to-one)
# ============================================================================
identity_links_table = Table(
    "identity_links",
    metadata,
    Column("identity_key", String(255), primary_key=True),
    Column("account_id", String(64), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    # Link row is inserted first to claim the key; the account follows in
    # the same transaction
    ForeignKeyConstraint(
        ["account_id"],
        ["accounts.id"],
        name="fk_identity_links_account",
        deferrable=True,
        initially="DEFERRED",
    ),
)

# ============================================================================
# RECALL PLAYERS TABLE
# ============================================================================
recall_players_table = Table(
    "recall_players",
    metadata,
    Column("token", String(64), primary_key=True),
    Column("username", String(64), nullable=False),
    Column("coins_owned", Integer, nullable=False, server_default="1"),
    Column("distance_traveled", Integer, nullable=False, server_default="100"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("coins_owned >= 0", name="ck_recall_players_coins"),
)
