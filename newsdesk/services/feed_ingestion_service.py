"""Feed ingestion pipeline.

One cycle lists the enabled feeds, fetches and parses each document and
stores every entry as a post whose `source` is the feed URL. Failures are
isolated: a feed that cannot be fetched or parsed is logged and skipped, and
an entry that cannot be stored does not stop the entries after it.

There is no "last seen" cursor. Every cycle reprocesses the full current
document of each feed, so unchanged entries are stored again each time.
"""

import logging
from typing import Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.errors import FeedFetchError, FeedParseError, StorageError
from newsdesk.models.feeds import IngestionResult
from newsdesk.schemas.feeds import Feed
from newsdesk.services.feed_fetcher import USER_AGENT, fetch_feed
from newsdesk.services.feed_parser import parse_feed
from newsdesk.services.feed_service import list_enabled_feeds
from newsdesk.services.post_service import create_post

logger = logging.getLogger(__name__)


async def run_ingestion_cycle(
    db: AsyncSession,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> IngestionResult:
    """Ingest every enabled feed once.

    Args:
        db: Async database session
        client: Optional HTTP client shared by all fetches in the cycle

    Returns:
        IngestionResult with counts and any per-feed errors
    """
    result = IngestionResult()

    try:
        feeds = await list_enabled_feeds(db)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(f"Failed to list feeds: {exc}")
        result.errors.append("Failed to list feeds")
        return result

    if client is None:
        async with httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as owned_client:
            await _ingest_feeds(db, feeds, owned_client, result)
    else:
        await _ingest_feeds(db, feeds, client, result)

    logger.info(
        f"Ingestion cycle done: {result.feeds_processed} feeds, "
        f"{result.items_added} added, {result.items_failed} failed, "
        f"{result.feeds_failed} feeds skipped"
    )
    return result


async def _ingest_feeds(
    db: AsyncSession,
    feeds: list[Feed],
    client: httpx.AsyncClient,
    result: IngestionResult,
) -> None:
    # Read plain values up front; a rollback after a failed insert expires ORM rows.
    targets = [feed.url for feed in feeds]
    for url in targets:
        result.feeds_processed += 1
        try:
            added, failed = await ingest_feed(db, url, client=client)
        except (FeedFetchError, FeedParseError) as exc:
            logger.warning(f"Skipping feed {url}: {exc}")
            result.feeds_failed += 1
            result.errors.append(str(exc))
            continue
        result.items_added += added
        result.items_failed += failed


async def ingest_feed(
    db: AsyncSession,
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> tuple[int, int]:
    """Fetch one feed and store its entries as posts.

    Returns:
        Tuple of (items_added, items_failed)

    Raises:
        FeedFetchError: the document could not be retrieved.
        FeedParseError: the document could not be parsed.
    """
    raw = await fetch_feed(url, client=client)
    entries = parse_feed(raw)
    logger.info(f"Fetched {len(entries)} entries from {url}")

    added = 0
    failed = 0
    for entry in entries:
        try:
            await create_post(
                db,
                title=entry.title,
                content=entry.body,
                source=url,
                published_at=None,
            )
        except StorageError as exc:
            logger.error(f"Failed to store entry '{entry.title[:50]}' from {url}: {exc.__cause__ or exc}")
            failed += 1
            continue
        added += 1

    return added, failed
