"""Article storage and deduplication."""

import json
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Callable, Dict, List, Optional, Sequence

import psycopg
from pydantic import BaseModel, Field

from ..errors import StorageError
from ..models import Article, ArticleDraft, Category, Language
from .connection import get_connection

ConnectionFactory = Callable[[], AbstractContextManager]


class ArticleFilters(BaseModel):
    """Filters for listing articles."""

    category: Optional[Category] = Field(None, description="Only this category")
    language: Optional[Language] = Field(None, description="Only this language")
    search: Optional[str] = Field(None, description="Case-insensitive match on title or summary")
    limit: int = Field(50, description="Maximum rows returned", ge=1, le=500)


class UpsertStats(BaseModel):
    """Outcome of an upsert batch."""

    total: int = 0
    new: int = 0
    duplicates: int = 0


class ArticleStore(ABC):
    """Persistence contract the sync pipeline writes through."""

    @abstractmethod
    def upsert_articles(self, drafts: Sequence[ArticleDraft]) -> UpsertStats:
        """
        Insert drafts, skipping any whose URL is already stored.

        Collisions are routine and never raise; only a failure of the
        store itself raises StorageError.

        Args:
            drafts: Normalized articles, newest first

        Returns:
            Counts of inserted and skipped drafts
        """
        pass

    @abstractmethod
    def list_articles(self, filters: Optional[ArticleFilters] = None) -> List[Article]:
        """List stored articles, newest first."""
        pass

    @abstractmethod
    def get_article(self, article_id: int) -> Optional[Article]:
        """Get a single article by id."""
        pass


INSERT_ARTICLE_SQL = """
    INSERT INTO articles (
        title, summary, content, url, image_url,
        source, category, language, published_at, location
    ) VALUES (
        %s, %s, %s, %s, %s, %s, %s, %s, %s, %s::jsonb
    )
    ON CONFLICT (url) DO NOTHING
    RETURNING id
"""


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_article(row: Dict[str, Any]) -> Article:
    data = dict(row)
    data["content"] = data.get("content") or ""
    location = data.get("location")
    if isinstance(location, str):
        data["location"] = json.loads(location)
    return Article.model_validate(data)


class ArticleStorage(ArticleStore):
    """Postgres-backed article store."""

    def __init__(self, connect: ConnectionFactory) -> None:
        """
        Initialize article storage.

        Args:
            connect: Zero-argument callable returning a connection context manager
        """
        self._connect = connect

    @classmethod
    def from_config(cls, db_config: Dict[str, Any]) -> "ArticleStorage":
        """Build a store that draws connections from the shared pool."""
        return cls(lambda: get_connection(db_config))

    def _row(self, draft: ArticleDraft) -> tuple:
        location = json.dumps(draft.location.model_dump()) if draft.location else None
        return (
            draft.title,
            draft.summary,
            draft.content,
            draft.url,
            draft.image_url,
            draft.source,
            draft.category.value,
            draft.language.value,
            draft.published_at,
            location,
        )

    def upsert_articles(self, drafts: Sequence[ArticleDraft]) -> UpsertStats:
        """Insert the batch in one transaction; a failure leaves nothing behind."""
        stats = UpsertStats(total=len(drafts))
        if not drafts:
            return stats

        try:
            with self._connect() as conn:
                try:
                    with conn.cursor() as cur:
                        for draft in drafts:
                            cur.execute(INSERT_ARTICLE_SQL, self._row(draft))
                            if cur.fetchone() is not None:
                                stats.new += 1
                            else:
                                stats.duplicates += 1
                    conn.commit()
                except psycopg.Error:
                    conn.rollback()
                    raise
        except psycopg.Error as e:
            raise StorageError(f"Failed to upsert {len(drafts)} articles: {e}") from e

        return stats

    def list_articles(self, filters: Optional[ArticleFilters] = None) -> List[Article]:
        """List articles matching the filters, newest first."""
        filters = filters or ArticleFilters()
        conditions = []
        params: List[Any] = []

        if filters.category:
            conditions.append("category = %s")
            params.append(filters.category.value)
        if filters.language:
            conditions.append("language = %s")
            params.append(filters.language.value)
        if filters.search:
            pattern = f"%{_escape_like(filters.search)}%"
            conditions.append("(title ILIKE %s OR summary ILIKE %s)")
            params.extend([pattern, pattern])

        query = "SELECT * FROM articles"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY published_at DESC LIMIT %s"
        params.append(filters.limit)

        try:
            with self._connect() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise StorageError(f"Failed to list articles: {e}") from e

        return [_to_article(row) for row in rows]

    def get_article(self, article_id: int) -> Optional[Article]:
        """Get article by ID."""
        try:
            with self._connect() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT * FROM articles WHERE id = %s", (article_id,))
                    row = cur.fetchone()
        except psycopg.Error as e:
            raise StorageError(f"Failed to load article {article_id}: {e}") from e

        return _to_article(row) if row else None
