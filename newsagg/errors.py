"""Exception hierarchy for the news aggregator."""

from typing import Optional


class NewsAggError(Exception):
    """Base class for all newsagg errors."""


class IngestionError(NewsAggError):
    """A single feed could not be ingested.

    These are recovered at the feed boundary: the feed contributes no
    articles and the sync run carries on with its siblings.
    """

    def __init__(self, feed_url: str, message: str) -> None:
        self.feed_url = feed_url
        super().__init__(f"{feed_url}: {message}")


class FetchError(IngestionError):
    """Network failure, timeout or non-2xx response while fetching a feed."""

    def __init__(
        self,
        feed_url: str,
        status: Optional[int] = None,
        cause: Optional[str] = None,
    ) -> None:
        self.status = status
        self.cause = cause
        if status is not None:
            message = f"HTTP {status}"
        else:
            message = cause or "fetch failed"
        super().__init__(feed_url, message)


class InvalidFormatError(IngestionError):
    """Fetched payload does not look like an XML feed."""

    def __init__(self, feed_url: str, reason: str = "payload is not XML") -> None:
        self.reason = reason
        super().__init__(feed_url, reason)


class ParseError(IngestionError):
    """Feed XML is malformed beyond recovery."""

    def __init__(self, feed_url: str, cause: str) -> None:
        self.cause = cause
        super().__init__(feed_url, f"Invalid RSS feed: {cause}")


class StorageError(NewsAggError):
    """The article store failed; not recoverable inside a sync run."""
