"""
Main entry point for the FastAPI application.
"""
from contextlib import asynccontextmanager
from datetime import timedelta
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsdesk.config import settings
from newsdesk.errors import NewsdeskError
from newsdesk.logging_config import setup_logging
from newsdesk.routes import auth, feeds, posts, users
from newsdesk.services.feed_scheduler import FeedScheduler
from newsdesk.services.user_service import ensure_default_admin
from newsdesk.utils.db_async import (
    DATABASE_URL,
    SessionLocal,
    describe_database_url,
    dispose_engine,
    init_db,
    wait_for_database,
)

logger = logging.getLogger(__name__)

setup_logging(
    level=settings.log_level,
    access_log=settings.access_log,
    worker_level=settings.feed_log_level,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Any failure here aborts startup
    logger.info(f"DB target: {describe_database_url(DATABASE_URL)}")
    await wait_for_database(settings.db_wait_timeout_seconds)
    await init_db()
    async with SessionLocal() as db:
        await ensure_default_admin(
            db,
            email=settings.default_admin_email,
            password=settings.default_admin_password,
        )
    logger.info("DB ready.")

    scheduler = FeedScheduler(
        SessionLocal,
        interval=timedelta(seconds=settings.feed_poll_interval_seconds),
    )
    if settings.feed_worker_enabled:
        scheduler.start()
    app.state.feed_scheduler = scheduler

    yield

    await scheduler.stop()
    try:
        logger.info("Disposing DB engine…")
        await dispose_engine()
        logger.info("DB engine disposed.")
    except Exception:
        logger.exception("Failed to dispose DB engine")


async def handle_app_error(request: Request, exc: NewsdeskError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc!r}",
            exc_info=exc.__cause__,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "invalid request"})


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


app = FastAPI(title="newsdesk", lifespan=lifespan)
if settings.allow_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type"],
    )
app.add_exception_handler(NewsdeskError, handle_app_error)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
app.add_exception_handler(StarletteHTTPException, handle_http_error)  # type: ignore[arg-type]
app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(users.router)
app.include_router(feeds.router)


@app.get("/healthz")
async def health_check():
    """Health Check Endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
