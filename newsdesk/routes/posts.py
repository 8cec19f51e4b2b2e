"""Post API routes. Reads are public; writes require an admin token."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.models.posts import PostCreate, PostRead, PostUpdate
from newsdesk.services import post_service
from newsdesk.services.authz import require_admin
from newsdesk.utils.db_async import get_session

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostRead])
async def list_posts(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_session),
) -> list[PostRead]:
    """List posts, newest first."""
    posts = await post_service.list_posts(db, limit=limit, offset=offset)
    return [PostRead.model_validate(post) for post in posts]


@router.get("/{post_id}", response_model=PostRead)
async def get_post(
    post_id: int,
    db: AsyncSession = Depends(get_session),
) -> PostRead:
    post = await post_service.get_post(db, post_id)
    return PostRead.model_validate(post)


@router.post(
    "",
    response_model=PostRead,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def create_post(
    payload: PostCreate,
    db: AsyncSession = Depends(get_session),
) -> PostRead:
    """Publish a post written by an admin (no `source`)."""
    post = await post_service.create_post(
        db, title=payload.title, content=payload.content
    )
    return PostRead.model_validate(post)


@router.put("/{post_id}", dependencies=[Depends(require_admin)])
async def update_post(
    post_id: int,
    payload: PostUpdate,
    db: AsyncSession = Depends(get_session),
) -> dict[str, bool]:
    await post_service.update_post(
        db, post_id, title=payload.title, content=payload.content
    )
    return {"updated": True}


@router.delete("/{post_id}", dependencies=[Depends(require_admin)])
async def delete_post(
    post_id: int,
    db: AsyncSession = Depends(get_session),
) -> dict[str, bool]:
    await post_service.delete_post(db, post_id)
    return {"deleted": True}
