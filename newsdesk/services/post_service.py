"""Post persistence used by the API and by the feed worker."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.errors import NotFoundError, StorageError
from newsdesk.schemas.posts import Post

logger = logging.getLogger(__name__)


async def create_post(
    db: AsyncSession,
    *,
    title: str,
    content: str,
    source: Optional[str] = None,
    published_at: Optional[datetime] = None,
) -> Post:
    """Insert and commit one post.

    Raises:
        StorageError: the insert failed; the session is rolled back and
            remains usable.
    """
    post = Post(
        title=title,
        content=content,
        source=source,
        published_at=published_at,
    )
    db.add(post)
    try:
        await db.commit()
        await db.refresh(post)
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError() from exc
    return post


async def get_post(db: AsyncSession, post_id: int) -> Post:
    """Return a post or raise NotFoundError."""
    post = await db.get(Post, post_id)
    if post is None:
        raise NotFoundError("post not found")
    return post


async def list_posts(
    db: AsyncSession,
    *,
    limit: int = 50,
    offset: int = 0,
) -> list[Post]:
    """Newest posts first."""
    result = await db.execute(
        select(Post)
        .order_by(Post.id.desc())  # type: ignore[union-attr]
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())


async def update_post(
    db: AsyncSession,
    post_id: int,
    *,
    title: str,
    content: str,
) -> Post:
    post = await get_post(db, post_id)
    post.title = title
    post.content = content
    try:
        await db.commit()
        await db.refresh(post)
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError() from exc
    return post


async def delete_post(db: AsyncSession, post_id: int) -> None:
    post = await get_post(db, post_id)
    try:
        await db.delete(post)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError() from exc
