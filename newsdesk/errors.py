"""Error taxonomy shared by the request path and the feed worker.

Request-path errors carry an HTTP status and a client-safe message; the
handlers registered in `newsdesk.main` render them as `{"error": message}`.
Feed errors never reach a client: the ingestion pipeline logs them and moves on.
"""

from __future__ import annotations


class NewsdeskError(Exception):
    """Base class for application errors."""

    status_code: int = 500
    message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequestError(NewsdeskError):
    """Malformed or missing request fields."""

    status_code = 400
    message = "invalid request"


class AuthError(NewsdeskError):
    """Bad credentials or an unusable token."""

    status_code = 401
    message = "invalid credentials"


class InvalidTokenError(AuthError):
    message = "invalid token"


class ExpiredTokenError(InvalidTokenError):
    message = "token expired"


class AuthzError(NewsdeskError):
    """Authenticated but not allowed."""

    status_code = 403
    message = "forbidden"


class NotFoundError(NewsdeskError):
    status_code = 404
    message = "not found"


class ConflictError(NewsdeskError):
    """A unique constraint would be violated."""

    status_code = 409
    message = "already exists"


class StorageError(NewsdeskError):
    """Persistence failure; clients only see the generic message."""

    status_code = 500
    message = "storage failure"


class FeedFetchError(NewsdeskError):
    """Network failure while retrieving a feed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"failed to fetch {url}: {reason}")


class FeedParseError(NewsdeskError):
    """A feed document was recognized but could not be parsed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to parse feed: {reason}")
