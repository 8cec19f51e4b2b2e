"""Async SQLAlchemy engine and session helpers."""

import asyncio
import logging
import ssl
from typing import Any, AsyncGenerator, Dict, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from newsdesk.config import settings

logger = logging.getLogger(__name__)


def _normalize_db_url(url: str) -> str:
    """Select an async driver for bare Postgres and SQLite URLs.

    "postgres://" and "postgresql://" become "postgresql+asyncpg://";
    "sqlite://" becomes "sqlite+aiosqlite://". Explicit drivers are kept.
    """
    try:
        u = make_url(url)
        driver = (u.drivername or "").lower()
        if "+" in driver:
            return u.render_as_string(hide_password=False)
        if driver in ("postgres", "postgresql"):
            u = u.set(drivername="postgresql+asyncpg")
        elif driver == "sqlite":
            u = u.set(drivername="sqlite+aiosqlite")
        return u.render_as_string(hide_password=False)
    except Exception:
        # Fallback string-level normalization for odd/partial URLs
        if url.startswith("postgresql://"):
            return "postgresql+asyncpg://" + url.split("://", 1)[1]
        if url.startswith("postgres://"):
            return "postgresql+asyncpg://" + url.split("://", 1)[1]
        return url


def _prepare_connection(url: str) -> Tuple[str, Dict[str, Any]]:
    """Strip query args asyncpg rejects and derive connect kwargs."""

    normalized_url = _normalize_db_url(url)
    if not normalized_url.startswith("postgresql+asyncpg://"):
        return normalized_url, {}

    split = urlsplit(normalized_url)
    query_pairs = parse_qsl(split.query, keep_blank_values=True)

    sslmode = None
    filtered_pairs = []
    for key, value in query_pairs:
        if key == "sslmode":
            sslmode = value
            continue
        if key == "channel_binding":
            continue
        filtered_pairs.append((key, value))

    cleaned_query = urlencode(filtered_pairs, doseq=True)
    cleaned_url = urlunsplit(split._replace(query=cleaned_query)).rstrip("?")

    connect_args: Dict[str, Any] = {}
    if sslmode:
        mode = sslmode.lower()
        if mode == "disable":
            connect_args["ssl"] = False
        elif mode in {"allow", "prefer"}:
            # asyncpg negotiates TLS on its own when the server requires it
            pass
        elif mode == "require":
            ssl_context = ssl.create_default_context()
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
            connect_args["ssl"] = ssl_context
        elif mode == "verify-ca":
            ssl_context = ssl.create_default_context()
            ssl_context.check_hostname = False
            connect_args["ssl"] = ssl_context
        else:
            connect_args["ssl"] = ssl.create_default_context()

    return cleaned_url, connect_args


DATABASE_URL, CONNECT_ARGS = _prepare_connection(settings.database_url)

engine = create_async_engine(
    DATABASE_URL,
    echo=settings.sql_echo,
    pool_pre_ping=True,
    connect_args=CONNECT_ARGS,
)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    async with SessionLocal() as session:
        yield session


def load_schema_modules() -> None:
    """Import table modules so SQLModel metadata is fully populated."""
    from newsdesk.schemas import feeds, posts, users  # noqa: F401


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create any missing tables."""
    load_schema_modules()
    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def wait_for_database(
    timeout: float,
    *,
    bind: AsyncEngine | None = None,
    poll_interval: float = 0.5,
) -> None:
    """Block until the database answers `SELECT 1`, or raise TimeoutError."""
    target = bind or engine
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while True:
        try:
            async with target.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return
        except Exception as exc:
            if loop.time() >= deadline:
                raise TimeoutError(
                    f"database not ready after {timeout:.0f}s: {exc}"
                ) from exc
            logger.debug("Database not ready yet: %s", exc)
        await asyncio.sleep(poll_interval)


async def dispose_engine() -> None:
    """Dispose of the async engine and its connection pool."""
    await engine.dispose()


def describe_database_url(url: str) -> str:
    """Return a sanitized, human-readable description of the DB URL for logging.

    Example: "postgresql+asyncpg://user@host:5432/dbname"
    Passwords are never included.
    """
    try:
        u = make_url(url)
        if u.drivername.startswith("sqlite"):
            return f"{u.drivername}:///{u.database or ':memory:'}"
        auth = u.username or "?"
        host = u.host or "?"
        port = f":{u.port}" if u.port else ""
        db = u.database or "?"
        return f"{u.drivername}://{auth}@{host}{port}/{db}"
    except Exception:
        # On parse failure, do not log the raw URL
        return "<unparseable database URL>"
