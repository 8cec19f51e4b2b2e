"""Request/response models for feed subscriptions and ingestion runs."""

from datetime import datetime

from sqlmodel import Field, SQLModel


class FeedCreate(SQLModel):
    url: str = Field(min_length=1)


class FeedUpdate(SQLModel):
    """Toggle polling for a feed without deleting it."""

    enabled: bool


class FeedRead(SQLModel):
    id: int
    url: str
    enabled: bool
    created_at: datetime


class IngestionResult(SQLModel):
    """Outcome of one ingestion cycle across all enabled feeds."""

    feeds_processed: int = 0
    feeds_failed: int = 0
    items_added: int = 0
    items_failed: int = 0
    errors: list[str] = Field(default_factory=list)
