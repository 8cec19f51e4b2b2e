#!/usr/bin/env python
"""Seed feed subscriptions.

Usage:
    python scripts/seed_feeds.py [URL ...]

Adds the given feed URLs (or the defaults below) if they are not subscribed
yet. Existing feeds are left untouched, including disabled ones.
"""

import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()


DEFAULT_FEEDS = [
    "https://blog.python.org/feeds/posts/default",
    "https://www.djangoproject.com/rss/weblog/",
]


async def seed_feeds(urls: list[str]) -> None:
    """Subscribe to each URL, skipping ones that already exist."""
    from newsdesk.errors import ConflictError
    from newsdesk.services.feed_service import create_feed
    from newsdesk.utils.db_async import SessionLocal, dispose_engine, init_db

    await init_db()
    added = 0
    skipped = 0
    try:
        async with SessionLocal() as session:
            for url in urls:
                try:
                    await create_feed(session, url=url)
                except ConflictError:
                    print(f"  SKIP: {url} (already exists)")
                    skipped += 1
                    continue
                print(f"  ADD: {url}")
                added += 1
    finally:
        await dispose_engine()

    print(f"\nSeeding complete: {added} added, {skipped} skipped")


if __name__ == "__main__":
    print("Seeding feeds...")
    asyncio.run(seed_feeds(sys.argv[1:] or DEFAULT_FEEDS))
