"""Shared column helpers for the table modules."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp for `TIMESTAMP WITH TIME ZONE` columns."""
    return datetime.now(UTC)
