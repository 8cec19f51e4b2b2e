"""Request/response models for user management."""

from datetime import datetime

from sqlmodel import Field, SQLModel


class UserCreate(SQLModel):
    """Request model for creating a user (admin)."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    is_admin: bool = False


class UserRead(SQLModel):
    """Public view of a user; the password hash is never included."""

    id: int
    email: str
    is_admin: bool
    created_at: datetime
