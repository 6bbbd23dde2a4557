"""Test helpers: a fixed clock, RSS document builder and an in-memory store."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
import threading
from typing import Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

from newsagg.db.articles import ArticleFilters, ArticleStore, UpsertStats
from newsagg.errors import StorageError
from newsagg.models import Article, ArticleDraft

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def rss_item(
    title: Optional[str] = "Headline",
    link: Optional[str] = "https://example.com/a",
    description: Optional[str] = "Summary text",
    published: Optional[datetime] = None,
    hours_ago: Optional[float] = 1,
    media_content: Optional[str] = None,
    media_thumbnail: Optional[str] = None,
    enclosure: Optional[str] = None,
    content_encoded: Optional[str] = None,
    pub_date: Optional[str] = None,
) -> str:
    """Render one <item> element; a raw ``pub_date`` string wins over ``published``."""
    if published is None and hours_ago is not None:
        published = NOW - timedelta(hours=hours_ago)

    parts = ["<item>"]
    if title is not None:
        parts.append(f"<title>{escape(title)}</title>")
    if link is not None:
        parts.append(f"<link>{escape(link)}</link>")
    if description is not None:
        parts.append(f"<description>{escape(description)}</description>")
    if content_encoded is not None:
        parts.append(f"<content:encoded><![CDATA[{content_encoded}]]></content:encoded>")
    if pub_date is not None:
        parts.append(f"<pubDate>{escape(pub_date)}</pubDate>")
    elif published is not None:
        parts.append(f"<pubDate>{format_datetime(published)}</pubDate>")
    if media_content is not None:
        parts.append(f'<media:content url="{escape(media_content)}" medium="image"/>')
    if media_thumbnail is not None:
        parts.append(f'<media:thumbnail url="{escape(media_thumbnail)}"/>')
    if enclosure is not None:
        parts.append(f'<enclosure url="{escape(enclosure)}" type="image/jpeg" length="1000"/>')
    parts.append("</item>")
    return "".join(parts)


def rss_document(*items: str, title: str = "Test Feed") -> str:
    """Render an RSS 2.0 document around the given items."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<rss version="2.0" '
        'xmlns:media="http://search.yahoo.com/mrss/" '
        'xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        f"<channel><title>{escape(title)}</title>"
        "<link>https://example.com/</link>"
        "<description>Test</description>"
        + "".join(items)
        + "</channel></rss>"
    )


def _text_fields(draft: ArticleDraft) -> List[Optional[str]]:
    return [draft.title, draft.summary, draft.content, draft.url, draft.image_url, draft.source]


class InMemoryArticleStore(ArticleStore):
    """Article store keyed by URL, mirroring the UNIQUE(url) constraint."""

    def __init__(self) -> None:
        self.rows: Dict[str, Article] = {}
        self.batches: List[List[ArticleDraft]] = []
        self.fail_with: Optional[Exception] = None
        self._next_id = 1
        self._lock = threading.Lock()

    def upsert_articles(self, drafts: Sequence[ArticleDraft]) -> UpsertStats:
        if self.fail_with is not None:
            raise self.fail_with
        with self._lock:
            return self._insert(drafts)

    def _insert(self, drafts: Sequence[ArticleDraft]) -> UpsertStats:
        self.batches.append(list(drafts))
        # Postgres rejects NUL in text columns and rolls the whole batch back
        for draft in drafts:
            if any("\x00" in (value or "") for value in _text_fields(draft)):
                raise StorageError("PostgreSQL text fields cannot contain NUL (0x00) bytes")
        stats = UpsertStats(total=len(drafts))
        for draft in drafts:
            if draft.url in self.rows:
                stats.duplicates += 1
                continue
            self.rows[draft.url] = Article(id=self._next_id, **draft.model_dump())
            self._next_id += 1
            stats.new += 1
        return stats

    def list_articles(self, filters: Optional[ArticleFilters] = None) -> List[Article]:
        filters = filters or ArticleFilters()
        articles = sorted(self.rows.values(), key=lambda a: a.published_at, reverse=True)
        if filters.category:
            articles = [a for a in articles if a.category == filters.category]
        if filters.language:
            articles = [a for a in articles if a.language == filters.language]
        if filters.search:
            needle = filters.search.lower()
            articles = [
                a for a in articles
                if needle in a.title.lower() or needle in a.summary.lower()
            ]
        return articles[: filters.limit]

    def get_article(self, article_id: int) -> Optional[Article]:
        for article in self.rows.values():
            if article.id == article_id:
                return article
        return None
