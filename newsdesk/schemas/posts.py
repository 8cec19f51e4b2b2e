"""Posts, authored by admins or created by the feed worker."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from newsdesk.schemas.base import utcnow


class Post(SQLModel, table=True):  # type: ignore[call-arg]
    """A published post.

    `source` holds the originating feed URL for ingested posts and is NULL
    for posts written through the API. Title and content are not unique:
    re-ingesting an unchanged feed stores the same entries again.
    """

    __tablename__ = "posts"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    content: str
    source: Optional[str] = Field(default=None, index=True)
    published_at: Optional[datetime] = Field(
        default=None, sa_type=DateTime(timezone=True)
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        index=True,
        sa_type=DateTime(timezone=True),
    )
