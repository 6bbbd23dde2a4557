"""Built-in feed registry."""

from typing import List

from ..models import Language
from .models import FeedConfig


def default_feeds() -> List[FeedConfig]:
    """Create the default English and Arabic news feeds."""
    return [
        FeedConfig(
            name="Al Jazeera English",
            url="https://www.aljazeera.com/xml/rss/all.xml",
            language=Language.EN,
        ),
        FeedConfig(
            name="BBC News",
            url="https://feeds.bbci.co.uk/news/rss.xml",
            language=Language.EN,
        ),
        FeedConfig(
            name="The Guardian",
            url="https://www.theguardian.com/rss",
            language=Language.EN,
        ),
        FeedConfig(
            name="Sky News",
            url="https://news.sky.com/feeds/rss/world",
            language=Language.EN,
        ),
        FeedConfig(
            name="CNN",
            url="http://rss.cnn.com/rss/edition.rss",
            language=Language.EN,
        ),
        FeedConfig(
            name="Axios",
            url="https://www.axios.com/feeds/feed.rss",
            language=Language.EN,
        ),
        FeedConfig(
            name="Reuters",
            url="https://www.reuters.com/arc/outboundfeeds/news-handler/?outputType=xml",
            language=Language.EN,
        ),
        FeedConfig(
            name="Al Jazeera Arabic",
            url="https://www.aljazeera.net/aljazeerarss/feed",
            language=Language.AR,
        ),
        FeedConfig(
            name="BBC Arabic",
            url="https://feeds.bbci.co.uk/arabic/world/rss.xml",
            language=Language.AR,
        ),
        FeedConfig(
            name="Sky News Arabia",
            url="https://www.skynewsarabia.com/rss/v1/global.xml",
            language=Language.AR,
        ),
    ]
