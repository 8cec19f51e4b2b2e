"""Request/response models for the login endpoint."""

from sqlmodel import Field, SQLModel


class LoginRequest(SQLModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(SQLModel):
    token: str
