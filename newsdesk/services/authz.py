"""Access-control dependencies for protected API routes.

`authenticate` resolves the bearer token into an `AuthContext`;
`require_admin` depends on it and re-checks the admin flag against the
database on every request, so revoking a user's admin flag takes effect
before their token expires.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.errors import AuthError, AuthzError, InvalidTokenError
from newsdesk.schemas.users import User
from newsdesk.services.token_service import TokenManager, get_token_manager
from newsdesk.services.user_service import get_user_by_id
from newsdesk.utils.db_async import get_session

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthContext:
    """Request-scoped identity handed to route handlers."""

    user_id: int
    # Claim from the token; `require_admin` replaces it with the stored flag.
    is_admin: bool
    user: User | None = None


async def authenticate(
    request: Request,
    tokens: TokenManager = Depends(get_token_manager),
) -> AuthContext:
    """Resolve the `Authorization: Bearer <token>` header (or raise 401)."""
    header = request.headers.get("Authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        raise AuthError("missing bearer token")

    try:
        claims = tokens.validate(header[len(BEARER_PREFIX):])
    except InvalidTokenError as exc:
        logger.debug("Rejected token: %s", type(exc).__name__)
        raise AuthError("invalid token") from exc

    return AuthContext(user_id=claims.subject_id, is_admin=claims.is_admin)


async def require_admin(
    ctx: AuthContext = Depends(authenticate),
    db: AsyncSession = Depends(get_session),
) -> AuthContext:
    """Allow only users whose stored record has the admin flag (or raise 403)."""
    if not ctx.user_id:
        raise AuthzError("admin only")

    try:
        user = await get_user_by_id(db, ctx.user_id)
    except SQLAlchemyError:
        logger.exception("Admin check failed for user %s", ctx.user_id)
        raise AuthzError("admin only")

    if user is None or not user.is_admin:
        raise AuthzError("admin only")
    return replace(ctx, is_admin=True, user=user)
