"""Token login for API clients."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.errors import AuthError
from newsdesk.models.auth import LoginRequest, LoginResponse
from newsdesk.services.token_service import TokenManager, get_token_manager
from newsdesk.services.user_service import authenticate_user
from newsdesk.utils.db_async import get_session

router = APIRouter(prefix="/admin", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_session),
    tokens: TokenManager = Depends(get_token_manager),
) -> LoginResponse:
    """Exchange email and password for a bearer token."""
    user = await authenticate_user(
        db, email=credentials.email, password=credentials.password
    )
    if user is None or user.id is None:
        raise AuthError("invalid credentials")
    return LoginResponse(token=tokens.issue(user.id, user.is_admin))
