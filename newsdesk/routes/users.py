"""User management routes (admin only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.models.users import UserCreate, UserRead
from newsdesk.services import user_service
from newsdesk.services.authz import require_admin
from newsdesk.utils.db_async import get_session

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[UserRead])
async def list_users(
    db: AsyncSession = Depends(get_session),
) -> list[UserRead]:
    users = await user_service.list_users(db)
    return [UserRead.model_validate(user) for user in users]


@router.post("", response_model=UserRead, status_code=201)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_session),
) -> UserRead:
    """Create a user; 409 when the email is taken."""
    user = await user_service.create_user(
        db,
        email=payload.email,
        password=payload.password,
        is_admin=payload.is_admin,
    )
    return UserRead.model_validate(user)
