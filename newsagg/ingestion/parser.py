"""Feed parsing with feedparser."""

import calendar
import time
import xml.sax
from datetime import datetime, timezone
from typing import Any, List, Optional

import feedparser
from bs4 import BeautifulSoup

from ..errors import ParseError
from .models import FeedItem, MediaRef

SNIPPET_LENGTH = 300


def strip_nul(value: Optional[str]) -> Optional[str]:
    """Drop NUL characters, which Postgres refuses in text columns."""
    if value is None:
        return None
    return value.replace("\x00", "")


def html_to_text(raw_html: str) -> str:
    """Strip tags, scripts and styles, collapsing whitespace."""
    soup = BeautifulSoup(raw_html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return " ".join(soup.get_text(separator=" ").split())


def struct_to_utc(parsed: Optional[time.struct_time]) -> Optional[datetime]:
    """Convert one of feedparser's UTC time tuples to an aware datetime."""
    if not parsed:
        return None
    try:
        return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        return None


def _text(entry: Any, key: str) -> Optional[str]:
    return (strip_nul(entry.get(key)) or "").strip() or None


def _media_refs(entries: Any) -> List[MediaRef]:
    refs = []
    for media in entries or []:
        refs.append(
            MediaRef(
                url=strip_nul(media.get("url")) or None,
                medium=media.get("medium"),
                type=media.get("type"),
            )
        )
    return refs


def _enclosure_url(entry: Any) -> Optional[str]:
    for enclosure in entry.get("enclosures", []) or []:
        url = strip_nul(enclosure.get("href") or enclosure.get("url"))
        if url:
            return url
    return None


class FeedParser:
    """Turn raw feed XML into FeedItems."""

    def __init__(self, snippet_length: int = SNIPPET_LENGTH) -> None:
        self.snippet_length = snippet_length

    def parse(self, raw: str, feed_url: str = "") -> List[FeedItem]:
        """Parse a feed document.

        A document that is not well-formed XML fails the whole feed, even
        when feedparser's loose fallback recovered some entries from it.
        Other ``bozo`` warnings (a declared encoding that does not match,
        an unexpected Content-Type) are tolerated as long as entries came
        through.
        """
        feed = feedparser.parse(strip_nul(raw))
        error = feed.get("bozo_exception")

        if isinstance(error, xml.sax.SAXException):
            raise ParseError(feed_url, str(error))
        if feed.bozo and not feed.entries:
            raise ParseError(feed_url, str(error or "unknown error"))

        return [self._to_item(entry) for entry in feed.entries]

    def _to_item(self, entry: Any) -> FeedItem:
        content_blocks = [
            strip_nul(block.get("value"))
            for block in entry.get("content", []) or []
            if block.get("value")
        ]
        content = "\n".join(content_blocks) or None
        content_encoded = content_blocks[0] if content_blocks else None

        snippet = None
        if content:
            snippet = html_to_text(content)[: self.snippet_length] or None

        return FeedItem(
            title=_text(entry, "title"),
            link=_text(entry, "link"),
            description=strip_nul(entry.get("summary")) or None,
            content=content,
            content_encoded=content_encoded,
            snippet=snippet,
            pub_date=entry.get("published") or entry.get("updated"),
            published=struct_to_utc(entry.get("published_parsed") or entry.get("updated_parsed")),
            enclosure_url=_enclosure_url(entry),
            media_content=_media_refs(entry.get("media_content")),
            media_thumbnail=_media_refs(entry.get("media_thumbnail")),
        )
