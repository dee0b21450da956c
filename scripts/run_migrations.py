#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3f1c9a7d2e44
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from ozza.config import Settings
from ozza.util.logging import setup_logging
from ozza.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the requested revision."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"

    with logfire.span("run_migrations", target=target, environment=settings.environment):
        try:
            command.upgrade(Config("alembic.ini"), target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The API must not start against a half-migrated schema
            raise

    logfire.info("Database migrated", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
