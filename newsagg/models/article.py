"""Article models: the normalized draft and the persisted row."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import DBModel


class Category(str, Enum):
    """Fixed set of article categories."""

    POLITICS = "Politics"
    ECONOMY = "Economy"
    SOCIAL = "Social"
    BUSINESS = "Business"
    EDUCATION = "Education"
    CULTURE = "Culture"
    TECHNOLOGY = "Technology"
    SPORTS = "Sports"
    WORLD = "World"
    HEALTH = "Health"
    ENTERTAINMENT = "Entertainment"
    SCIENCE = "Science"
    GENERAL = "General"


class Language(str, Enum):
    """Feed languages."""

    EN = "en"
    AR = "ar"


class Location(BaseModel):
    """Decorative map coordinate attached to an article."""

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    label: str = Field("News Location")


class ArticleDraft(BaseModel):
    """Normalized, categorized article ready for persistence."""

    title: str = Field(..., min_length=1, description="Article title")
    summary: str = Field("", description="Short summary, may be empty")
    content: str = Field("", description="Full body if the feed carries one")
    url: str = Field(..., min_length=1, description="Article URL, unique")
    image_url: Optional[str] = Field(None, description="Best-effort image URL")
    source: str = Field(..., min_length=1, description="Publisher label")
    category: Category = Field(Category.WORLD, description="Assigned category")
    language: Language = Field(..., description="Language of the feed")
    published_at: datetime = Field(..., description="Publication timestamp")
    location: Optional[Location] = Field(None, description="Display coordinate")

    @field_validator("published_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class Article(ArticleDraft, DBModel):
    """Persisted article."""
