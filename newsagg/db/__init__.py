"""Database management for the news aggregator."""

from .articles import ArticleFilters, ArticleStorage, ArticleStore, UpsertStats
from .connection import close_connection_pool, get_connection, get_connection_pool
from .init import init_database, validate_connection

__all__ = [
    "ArticleFilters",
    "ArticleStorage",
    "ArticleStore",
    "UpsertStats",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
