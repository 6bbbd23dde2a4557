"""Database initialization and schema management."""

from typing import Any, Dict

from psycopg.errors import DatabaseError
from rich.console import Console

from .connection import get_connection

console = Console(stderr=True)


SCHEMA_SQL = """
-- Articles table; url is the natural key used for deduplication
CREATE TABLE IF NOT EXISTS articles (
    id SERIAL PRIMARY KEY,
    title TEXT NOT NULL,
    summary TEXT NOT NULL,
    content TEXT,
    url TEXT NOT NULL,
    image_url TEXT,
    source TEXT NOT NULL,
    category TEXT NOT NULL DEFAULT 'World',
    language TEXT NOT NULL DEFAULT 'en' CHECK (language IN ('en', 'ar')),
    published_at TIMESTAMPTZ NOT NULL,
    location JSONB,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(url)
);

-- Create indexes
CREATE INDEX IF NOT EXISTS idx_articles_published_at ON articles(published_at DESC);
CREATE INDEX IF NOT EXISTS idx_articles_category ON articles(category);
CREATE INDEX IF NOT EXISTS idx_articles_language ON articles(language);
"""


def validate_connection(config: Dict[str, Any]) -> bool:
    """Validate database connection."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except Exception as e:
        console.print(f"[red]Database connection failed: {e}[/red]")
        return False


def init_database(config: Dict[str, Any]) -> None:
    """Initialize database schema."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                conn.commit()
    except DatabaseError as e:
        console.print(f"[red]Failed to initialize database schema: {e}[/red]")
        raise
