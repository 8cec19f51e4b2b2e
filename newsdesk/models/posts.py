"""Request/response models for posts."""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class PostCreate(SQLModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class PostUpdate(SQLModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class PostRead(SQLModel):
    id: int
    title: str
    content: str
    source: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: datetime
