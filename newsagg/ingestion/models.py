"""Data models for ingestion."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import ArticleDraft


class MediaRef(BaseModel):
    """A media:content or media:thumbnail reference."""

    url: Optional[str] = Field(None, description="URL attribute")
    medium: Optional[str] = Field(None, description="Media kind (image, video)")
    type: Optional[str] = Field(None, description="MIME type")


class FeedItem(BaseModel):
    """Parsed RSS feed item, before normalization.

    Every field is optional: feed dialects disagree on which ones they
    carry, and the normalizer resolves them in a fixed order.
    """

    title: Optional[str] = Field(None, description="Item title")
    link: Optional[str] = Field(None, description="Item URL")
    description: Optional[str] = Field(None, description="RSS description / Atom summary")
    content: Optional[str] = Field(None, description="All content blocks joined")
    content_encoded: Optional[str] = Field(None, description="First content:encoded block")
    snippet: Optional[str] = Field(None, description="Plain-text snippet of the content")
    pub_date: Optional[str] = Field(None, description="Raw publish date string")
    published: Optional[datetime] = Field(None, description="Publish date as parsed by feedparser, UTC")
    enclosure_url: Optional[str] = Field(None, description="Enclosure URL")
    media_content: List[MediaRef] = Field(default_factory=list)
    media_thumbnail: List[MediaRef] = Field(default_factory=list)


class FeedResult(BaseModel):
    """Outcome of syncing one feed."""

    source_name: str = Field(..., description="Feed name")
    source_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether the feed was ingested")
    articles: List[ArticleDraft] = Field(default_factory=list, description="Fresh drafts")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Items parsed from the feed")
    stale_count: int = Field(0, description="Items dropped by the freshness window")
    discarded_count: int = Field(0, description="Items dropped for having no link")
