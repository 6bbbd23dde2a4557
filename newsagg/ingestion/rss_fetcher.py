"""RSS feed fetcher."""

import asyncio
import re

import httpx

from ..errors import FetchError, InvalidFormatError

# Root elements of RSS 2.0, Atom and RSS 1.0 (RDF) documents
_FEED_ROOT = re.compile(r"<(rss|feed|rdf:RDF)[\s>]", re.IGNORECASE)
_SNIFF_CHARS = 2048


def looks_like_xml(payload: str) -> bool:
    """Check whether a payload plausibly is an XML feed."""
    head = payload.lstrip("\ufeff \t\r\n")[:_SNIFF_CHARS]
    if head.startswith("<?xml"):
        return True
    return _FEED_ROOT.search(head) is not None


class FeedFetcher:
    """Fetch raw feed documents over HTTP."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "newsagg/1.0 (News Aggregator)",
    ) -> None:
        """Initialize feed fetcher."""
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch(self, feed_url: str) -> str:
        """Fetch a feed, raising FetchError on any transport or HTTP failure.

        httpx applies its timeout to each connect and read step; the whole
        request, body included, is also bounded by the same number of seconds
        so a server trickling bytes cannot hold the feed open.
        """
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/rss+xml, application/atom+xml, application/xml, text/xml, */*",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers=headers,
            ) as client:
                response = await asyncio.wait_for(client.get(feed_url), timeout=self.timeout)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            raise FetchError(feed_url, status=e.response.status_code) from e
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise FetchError(feed_url, cause="Request timed out") from e
        except httpx.HTTPError as e:
            raise FetchError(feed_url, cause=f"HTTP error: {e}") from e

    def validate(self, feed_url: str, payload: str) -> str:
        """Reject payloads that are not XML before they reach the parser."""
        if not payload or not payload.strip():
            raise InvalidFormatError(feed_url, "empty response body")
        if not looks_like_xml(payload):
            raise InvalidFormatError(feed_url, "response is not an XML feed")
        return payload

    async def fetch_and_validate(self, feed_url: str) -> str:
        """Fetch a feed and check it looks like XML."""
        payload = await self.fetch(feed_url)
        return self.validate(feed_url, payload)
