"""HTTP retrieval of feed documents."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from newsdesk.config import settings
from newsdesk.errors import FeedFetchError

logger = logging.getLogger(__name__)

USER_AGENT = "newsdesk-feed-worker/1.0"


async def _get(client: httpx.AsyncClient, url: str, timeout: float) -> bytes:
    try:
        response = await client.get(url, timeout=timeout)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise FeedFetchError(url, f"{type(exc).__name__}: {exc}") from exc

    if not response.is_success:
        # A broken feed contributes nothing this cycle; it is not an error.
        logger.warning(
            "Feed %s returned HTTP %s, skipping", url, response.status_code
        )
        return b""
    return response.content


async def fetch_feed(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> bytes:
    """Download a feed document.

    Args:
        url: Feed URL.
        client: Optional shared client; a short-lived one is created otherwise.
        timeout: Overall request timeout in seconds (defaults to
            `settings.feed_fetch_timeout_seconds`).

    Returns:
        The response body, or b"" for a non-2xx status.

    Raises:
        FeedFetchError: DNS failure, refused connection, timeout or another
            transport-level error.
    """
    effective_timeout = (
        timeout if timeout is not None else settings.feed_fetch_timeout_seconds
    )

    if client is not None:
        return await _get(client, url, effective_timeout)

    async with httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    ) as owned_client:
        return await _get(owned_client, url, effective_timeout)
