"""Feed subscription persistence."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.errors import ConflictError, NotFoundError, StorageError
from newsdesk.schemas.feeds import Feed


async def list_enabled_feeds(db: AsyncSession) -> list[Feed]:
    """Feeds the worker should poll, newest subscription first."""
    result = await db.execute(
        select(Feed)
        .where(Feed.enabled.is_(True))  # type: ignore[attr-defined]
        .order_by(Feed.id.desc())  # type: ignore[union-attr]
    )
    return list(result.scalars().all())


async def get_feed(db: AsyncSession, feed_id: int) -> Feed:
    feed = await db.get(Feed, feed_id)
    if feed is None:
        raise NotFoundError("feed not found")
    return feed


async def create_feed(db: AsyncSession, *, url: str) -> Feed:
    """Subscribe to a feed URL.

    Raises:
        ConflictError: the URL is already subscribed (enabled or not).
    """
    existing = await db.execute(
        select(Feed.id).where(Feed.url == url)  # type: ignore[call-overload,arg-type]
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("feed with this url already exists")

    feed = Feed(url=url, enabled=True)
    db.add(feed)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent insert of the same URL
        await db.rollback()
        raise ConflictError("feed with this url already exists") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError() from exc
    await db.refresh(feed)
    return feed


async def set_feed_enabled(db: AsyncSession, feed_id: int, *, enabled: bool) -> Feed:
    feed = await get_feed(db, feed_id)
    feed.enabled = enabled
    try:
        await db.commit()
        await db.refresh(feed)
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError() from exc
    return feed


async def delete_feed(db: AsyncSession, feed_id: int) -> None:
    feed = await get_feed(db, feed_id)
    try:
        await db.delete(feed)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError() from exc
