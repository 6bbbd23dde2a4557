"""Map feed items to canonical article drafts."""

import random
from datetime import datetime, timezone
from typing import Optional

import pendulum
from feedparser.datetimes import _parse_date as _parse_feed_date

from ..config import FeedConfig
from ..models import ArticleDraft, Location
from .categorizer import categorize
from .models import FeedItem
from .parser import strip_nul, struct_to_utc

UNTITLED = "Untitled"
LOCATION_LABEL = "News Location"


def resolve_image_url(item: FeedItem) -> Optional[str]:
    """Pick the image URL: media:content, then enclosure, then media:thumbnail."""
    if item.media_content and item.media_content[0].url:
        return item.media_content[0].url
    if item.enclosure_url:
        return item.enclosure_url
    if item.media_thumbnail and item.media_thumbnail[0].url:
        return item.media_thumbnail[0].url
    return None


def resolve_summary(item: FeedItem) -> str:
    """Pick the summary: description, then content snippet."""
    return item.description or item.snippet or ""


def resolve_content(item: FeedItem) -> str:
    """Pick the body: content:encoded, then content, then description."""
    return item.content_encoded or item.content or item.description or ""


def parse_published(value: Optional[str]) -> Optional[datetime]:
    """Parse a raw feed date string into UTC.

    Runs feedparser's own date handlers (RFC 822 with or without a colon in
    the offset, W3C-DTF, ISO 8601 and friends) and then pendulum for
    anything ISO-like they missed. Returns None when nothing parses.
    """
    if not value or not value.strip():
        return None
    value = value.strip()

    parsed = struct_to_utc(_parse_feed_date(value))
    if parsed is not None:
        return parsed

    try:
        fallback = pendulum.parse(value)
    except ValueError:
        return None
    if not isinstance(fallback, datetime):
        return None
    if fallback.tzinfo is None:
        fallback = fallback.replace(tzinfo=timezone.utc)
    return fallback.astimezone(timezone.utc)


def random_location(rng: random.Random) -> Location:
    """Decorative coordinate for map display; carries no geographic meaning."""
    return Location(
        lat=rng.uniform(-80.0, 80.0),
        lng=rng.uniform(-180.0, 180.0),
        label=LOCATION_LABEL,
    )


class ArticleNormalizer:
    """Build ArticleDrafts from feed items."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def normalize(
        self,
        item: FeedItem,
        feed: FeedConfig,
        now: datetime,
    ) -> Optional[ArticleDraft]:
        """Normalize one item; returns None when the item has no link.

        Text fields are scrubbed of NUL characters here as well as in the
        parser, since items may come from other producers.
        """
        url = (strip_nul(item.link) or "").strip()
        if not url:
            return None

        title = (strip_nul(item.title) or "").strip() or UNTITLED
        content = strip_nul(resolve_content(item))

        return ArticleDraft(
            title=title,
            summary=strip_nul(resolve_summary(item)),
            content=content,
            url=url,
            image_url=strip_nul(resolve_image_url(item)),
            source=feed.name,
            category=categorize(title, content),
            language=feed.language,
            published_at=item.published or parse_published(item.pub_date) or now,
            location=random_location(self.rng),
        )
