"""Feed subscription routes and on-demand ingestion.

Provides endpoints for:
- Listing the feeds the worker polls (public)
- Subscribing, enabling/disabling and removing feeds (admin)
- Triggering an ingestion cycle outside the schedule (admin)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.errors import InvalidRequestError
from newsdesk.models.feeds import FeedCreate, FeedRead, FeedUpdate, IngestionResult
from newsdesk.services import feed_service
from newsdesk.services.authz import require_admin
from newsdesk.services.feed_ingestion_service import run_ingestion_cycle
from newsdesk.utils.db_async import get_session

router = APIRouter(prefix="/feeds", tags=["feeds"])


@router.get("", response_model=list[FeedRead])
async def list_feeds(
    db: AsyncSession = Depends(get_session),
) -> list[FeedRead]:
    """List enabled feeds."""
    feeds = await feed_service.list_enabled_feeds(db)
    return [FeedRead.model_validate(feed) for feed in feeds]


@router.post(
    "",
    response_model=FeedRead,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def create_feed(
    payload: FeedCreate,
    db: AsyncSession = Depends(get_session),
) -> FeedRead:
    """Subscribe to a feed; 409 when the URL is already subscribed."""
    url = payload.url.strip()
    if not url:
        raise InvalidRequestError()
    feed = await feed_service.create_feed(db, url=url)
    return FeedRead.model_validate(feed)


@router.post(
    "/ingest",
    response_model=IngestionResult,
    dependencies=[Depends(require_admin)],
)
async def trigger_ingestion(
    db: AsyncSession = Depends(get_session),
) -> IngestionResult:
    """Run one ingestion cycle now, independent of the scheduler."""
    return await run_ingestion_cycle(db)


@router.patch(
    "/{feed_id}",
    response_model=FeedRead,
    dependencies=[Depends(require_admin)],
)
async def update_feed(
    feed_id: int,
    payload: FeedUpdate,
    db: AsyncSession = Depends(get_session),
) -> FeedRead:
    """Enable or disable polling without deleting the feed."""
    feed = await feed_service.set_feed_enabled(db, feed_id, enabled=payload.enabled)
    return FeedRead.model_validate(feed)


@router.delete("/{feed_id}", dependencies=[Depends(require_admin)])
async def delete_feed(
    feed_id: int,
    db: AsyncSession = Depends(get_session),
) -> dict[str, bool]:
    await feed_service.delete_feed(db, feed_id)
    return {"deleted": True}
