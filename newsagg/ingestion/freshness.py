"""Freshness window applied to normalized drafts."""

from datetime import datetime, timedelta
from typing import Iterable, List

from ..models import ArticleDraft

DEFAULT_WINDOW = timedelta(hours=24)


def is_fresh(
    article: ArticleDraft,
    now: datetime,
    window: timedelta = DEFAULT_WINDOW,
) -> bool:
    """True if the article was published within ``window`` of ``now``."""
    return article.published_at >= now - window


class FreshnessFilter:
    """Drop drafts older than the retention window."""

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        self.window = window

    @classmethod
    def from_hours(cls, hours: int) -> "FreshnessFilter":
        return cls(timedelta(hours=hours))

    def apply(self, drafts: Iterable[ArticleDraft], now: datetime) -> List[ArticleDraft]:
        return [draft for draft in drafts if is_fresh(draft, now, self.window)]
