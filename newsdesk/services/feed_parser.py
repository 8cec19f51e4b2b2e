"""Feed document parsing.

Turns a raw RSS or Atom document into normalized entries ready to be stored
as posts. The format is sniffed from the document text rather than taken from
the Content-Type header, and an unrecognized document simply yields no
entries.

Entry bodies go through `strip_markup`, a single-pass scanner that drops
everything between `<` and `>`. It is not an HTML parser: entities are left
as-is, and a stray `<` hides the text after it until the next `>`.
"""

from __future__ import annotations

import io
import logging
import xml.sax
from dataclasses import dataclass
from typing import Any, Literal, Optional

import feedparser  # type: ignore[import-untyped]

from newsdesk.errors import FeedParseError

logger = logging.getLogger(__name__)

FeedFormat = Literal["rss", "atom"]


@dataclass(frozen=True)
class ParsedEntry:
    """One normalized entry extracted from a feed document."""

    title: str
    body: str
    published: str
    raw_format: FeedFormat


def detect_format(text: str) -> Optional[FeedFormat]:
    """Return the feed format by looking for root and item markers."""
    if "<rss" in text and "<channel" in text:
        return "rss"
    if "<feed" in text and "<entry" in text:
        return "atom"
    return None


def strip_markup(text: str) -> str:
    """Copy characters outside `<...>` spans and discard the rest."""
    out: list[str] = []
    inside = False
    for ch in text:
        if ch == "<":
            inside = True
        elif ch == ">":
            inside = False
        elif not inside:
            out.append(ch)
    return "".join(out)


def normalize_entry(
    title: str,
    body: str,
    *,
    published: str = "",
    raw_format: FeedFormat,
) -> Optional[ParsedEntry]:
    """Trim fields and fill an empty title or body from the other one.

    Returns None when both are empty after trimming.
    """
    title = title.strip()
    body = strip_markup(body).strip()
    if not title and not body:
        return None
    return ParsedEntry(
        title=title or body,
        body=body or title,
        published=published.strip(),
        raw_format=raw_format,
    )


def _atom_content(entry: Any) -> str:
    contents = entry.get("content") or []
    if not contents:
        return ""
    return contents[0].get("value", "") or ""


def parse_feed(raw: bytes | str) -> list[ParsedEntry]:
    """Extract entries from an RSS or Atom document.

    RSS items contribute title/description/pubDate, Atom entries
    title/content/updated. Empty and unrecognized documents return [].

    Raises:
        FeedParseError: the document looks like a feed but is not
            well-formed XML.
    """
    if not raw:
        return []

    if isinstance(raw, str):
        text = raw
        data = raw.encode("utf-8")
    else:
        data = raw
        text = raw.decode("utf-8", errors="replace")

    feed_format = detect_format(text)
    if feed_format is None:
        return []

    parsed = feedparser.parse(
        io.BytesIO(data),
        sanitize_html=False,
        resolve_relative_uris=False,
    )
    if parsed.bozo and isinstance(parsed.bozo_exception, xml.sax.SAXException):
        raise FeedParseError(str(parsed.bozo_exception))

    entries: list[ParsedEntry] = []
    for item in parsed.entries:
        if feed_format == "rss":
            title = item.get("title", "")
            # feedparser fills `summary` from <description>, else from
            # <itunes:summary> or <content:encoded>
            body = item.get("summary", "")
            published = item.get("published", "")
        else:
            title = item.get("title", "")
            body = _atom_content(item)
            published = item.get("updated", "")

        entry = normalize_entry(
            title or "",
            body or "",
            published=published or "",
            raw_format=feed_format,
        )
        if entry is None:
            logger.debug("Dropping %s entry with empty title and body", feed_format)
            continue
        entries.append(entry)

    return entries
