"""External RSS/Atom feeds polled by the feed worker."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from newsdesk.schemas.base import utcnow


class Feed(SQLModel, table=True):  # type: ignore[call-arg]
    """Feed subscription. Disabled feeds stay in the table but are not polled."""

    __tablename__ = "feeds"

    id: Optional[int] = Field(default=None, primary_key=True)
    url: str = Field(unique=True)
    enabled: bool = Field(default=True, index=True)
    created_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime(timezone=True)
    )
