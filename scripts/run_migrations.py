#!/usr/bin/env python3
"""Bring the PostgreSQL account store schema up to date.

Usage: run_migrations.py [revision]   (default: head)

Does nothing when the in-memory store is configured.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from levelup.config import Settings
from levelup.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    settings = Settings()
    revision = argv[1] if len(argv) > 1 else "head"

    if settings.persistence.backend != "postgres":
        print(f"PERSISTENCE__BACKEND={settings.persistence.backend}; no schema to migrate")
        return 0

    configure_logfire(settings, "linking")

    with logfire.span("Upgrading account store schema", revision=revision):
        try:
            command.upgrade(Config(str(ALEMBIC_INI)), revision)
        except Exception as e:
            logfire.error(
                "Account store migration failed",
                revision=revision,
                error=str(e),
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve against an old schema
            raise

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
