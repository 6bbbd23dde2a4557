"""Database connection management."""

import os
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool


class DatabaseConfig:
    """Database configuration."""

    def __init__(self, config: Dict[str, Any]) -> None:
        """Initialize database config from dict."""
        self.url = config.get("url")
        self.host = config.get("host", "localhost")
        self.port = config.get("port", 5432)
        self.database = config.get("database", "newsagg")
        self.user = config.get("user", "newsagg")
        self.pool_size = config.get("pool_size", 10)

        password_env = config.get("password_env")
        self.password = (password_env and os.environ.get(password_env)) or config.get("password") or ""

    @property
    def conninfo(self) -> str:
        """Connection string; a full URL takes precedence over discrete fields."""
        if self.url:
            return self.url
        return make_conninfo(
            host=self.host,
            port=self.port,
            dbname=self.database,
            user=self.user,
            password=self.password or None,
        )


_pool: Optional[ConnectionPool] = None


def get_connection_pool(config: Dict[str, Any]) -> ConnectionPool:
    """Return the process-wide pool, opening it on first use."""
    global _pool
    if _pool is None:
        db = DatabaseConfig(config)
        _pool = ConnectionPool(
            db.conninfo,
            min_size=1,
            max_size=db.pool_size,
            kwargs={"row_factory": dict_row},
            open=True,
        )
    return _pool


def close_connection_pool() -> None:
    """Close the pool if one was opened."""
    global _pool
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection(config: Dict[str, Any]) -> Generator[psycopg.Connection, None, None]:
    """Borrow a connection from the pool."""
    with get_connection_pool(config).connection() as conn:
        yield conn
