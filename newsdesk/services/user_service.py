"""User accounts: lookup, creation, login and the startup admin bootstrap."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.errors import ConflictError, StorageError
from newsdesk.schemas.users import User
from newsdesk.services.password_service import hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and comparisons."""
    return email.strip().casefold()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(
        select(User).where(User.id == user_id)  # type: ignore[arg-type]
    )
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(
        select(User).where(User.email == normalize_email(email))  # type: ignore[arg-type]
    )
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(
        select(User).order_by(User.id.desc())  # type: ignore[union-attr]
    )
    return list(result.scalars().all())


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    password: str,
    is_admin: bool = False,
) -> User:
    """Create a user with a hashed password.

    Raises:
        ConflictError: the email is already registered.
        StorageError: any other database failure.
    """
    user = User(
        email=normalize_email(email),
        password_hash=hash_password(password),
        is_admin=is_admin,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("user with this email already exists") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Failed to create user: %s", exc)
        raise StorageError() from exc
    await db.refresh(user)
    return user


async def authenticate_user(
    db: AsyncSession,
    *,
    email: str,
    password: str,
) -> User | None:
    """Return the user if the credentials are valid, None otherwise."""
    user = await get_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(user.password_hash, password):
        return None
    return user


async def ensure_default_admin(
    db: AsyncSession,
    *,
    email: str | None,
    password: str | None,
) -> User | None:
    """Create the bootstrap administrator when no admin account exists.

    Returns the created user, or None when an admin was already present.

    Raises:
        RuntimeError: no admin exists and no bootstrap credentials are configured.
    """
    result = await db.execute(
        select(func.count()).select_from(User).where(
            User.is_admin.is_(True)  # type: ignore[attr-defined]
        )
    )
    if (result.scalar() or 0) > 0:
        return None

    if not email or not password:
        raise RuntimeError("missing default admin credentials in config")

    user = await create_user(db, email=email, password=password, is_admin=True)
    logger.info("Created default admin %s", user.email)
    return user
