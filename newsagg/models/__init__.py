"""Data models for the news aggregator."""

from .article import Article, ArticleDraft, Category, Language, Location

__all__ = ["Article", "ArticleDraft", "Category", "Language", "Location"]
