"""Fixtures for API tests that need signed-in users."""

from __future__ import annotations

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.schemas.users import User
from tests.integration.auth_helpers import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    EDITOR_EMAIL,
    EDITOR_PASSWORD,
    bearer,
    create_account,
    login_token,
)


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_account(
        db_session, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, is_admin=True
    )


@pytest_asyncio.fixture
async def editor_user(db_session: AsyncSession) -> User:
    """A regular, non-admin account."""
    return await create_account(
        db_session, email=EDITOR_EMAIL, password=EDITOR_PASSWORD
    )


@pytest_asyncio.fixture
async def admin_headers(app_client: AsyncClient, admin_user: User) -> dict[str, str]:
    token = await login_token(app_client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD)
    return bearer(token)


@pytest_asyncio.fixture
async def editor_headers(app_client: AsyncClient, editor_user: User) -> dict[str, str]:
    token = await login_token(app_client, email=EDITOR_EMAIL, password=EDITOR_PASSWORD)
    return bearer(token)
