"""Standalone runner for one feed ingestion cycle.

Runs the same cycle the in-process scheduler runs, without starting the web
app. Useful from an external cron or for checking a feed by hand.

Usage:
    python -m newsdesk.cli.cron_runner

Exit codes:
    0 - Success
    1 - Failure (check logs for details)
"""

import asyncio
import logging
import sys
from datetime import datetime, timezone

from newsdesk.config import settings
from newsdesk.logging_config import setup_logging
from newsdesk.services.feed_ingestion_service import run_ingestion_cycle
from newsdesk.utils.db_async import SessionLocal, dispose_engine, init_db

logger = logging.getLogger("cron_runner")


async def main() -> int:
    """Run the feed ingestion cycle.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    start_time = datetime.now(timezone.utc)
    logger.info("Starting feed ingestion")

    try:
        await init_db()
        async with SessionLocal() as db:
            result = await run_ingestion_cycle(db)

        elapsed = (datetime.now(timezone.utc) - start_time).total_seconds()

        logger.info(
            f"Ingestion complete in {elapsed:.1f}s: "
            f"{result.feeds_processed} feeds, "
            f"{result.items_added} added, "
            f"{result.items_failed} failed"
        )

        for error in result.errors:
            logger.warning(f"Ingestion error: {error}")

        return 0

    except Exception as e:
        elapsed = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.error(f"Ingestion failed after {elapsed:.1f}s: {e}", exc_info=True)
        return 1

    finally:
        await dispose_engine()


if __name__ == "__main__":
    setup_logging(
        level=settings.log_level,
        access_log=False,
        worker_level=settings.feed_log_level,
    )
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
