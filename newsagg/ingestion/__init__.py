"""RSS ingestion: fetch, parse, normalize, categorize."""

from .categorizer import categorize
from .freshness import FreshnessFilter, is_fresh
from .models import FeedItem, FeedResult, MediaRef
from .normalizer import ArticleNormalizer
from .parser import FeedParser
from .rss_fetcher import FeedFetcher

__all__ = [
    "ArticleNormalizer",
    "FeedFetcher",
    "FeedItem",
    "FeedParser",
    "FeedResult",
    "FreshnessFilter",
    "MediaRef",
    "categorize",
    "is_fresh",
]
