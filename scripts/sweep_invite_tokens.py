#!/usr/bin/env python3
"""Expire stale invitations and drop expired invite tokens.

Meant for a periodic job (cron or a scheduled container). Validation never
depends on it: expiry is always checked against the clock.
"""

import asyncio
import sys

import logfire

from ozza.application.usecase.maintenance import SweepExpiredUseCase
from ozza.config import Settings
from ozza.util.di.container import create_container
from ozza.util.logging import setup_logging
from ozza.util.observability import configure_logfire


async def sweep() -> None:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(SweepExpiredUseCase)
            result = await use_case.execute()
            logfire.info(
                "Sweep completed",
                invitations_expired=result.invitations_expired,
                tokens_removed=result.tokens_removed,
            )
    finally:
        await container.close()


def main() -> int:
    """Run one sweep and log any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        asyncio.run(sweep())
        return 0
    except Exception as e:
        logfire.error(
            "Sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
