"""Sync orchestrator: one pass of fetch-all, normalize-all, upsert-all."""

import asyncio
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

import pendulum
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import FeedConfig, SyncSettings
from ..db.articles import ArticleStore, UpsertStats
from ..errors import IngestionError
from ..ingestion import ArticleNormalizer, FeedFetcher, FeedParser, FeedResult, FreshnessFilter
from ..models import ArticleDraft

console = Console(stderr=True)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return pendulum.now("UTC")


class SyncResult(BaseModel):
    """Outcome of one sync run."""

    count: int = Field(..., description="Articles submitted to storage")
    timestamp: datetime = Field(..., description="Completion time")
    started_at: datetime = Field(..., description="Snapshot time used for freshness")
    new: int = Field(0, description="Rows inserted")
    duplicates: int = Field(0, description="Rows skipped on URL collision")
    feeds: List[FeedResult] = Field(default_factory=list, description="Per-feed outcomes")

    @property
    def feeds_failed(self) -> int:
        return sum(1 for f in self.feeds if not f.success)

    def to_payload(self) -> Dict[str, object]:
        """The {count, timestamp} pair handed back to whoever triggered the run."""
        return {"count": self.count, "timestamp": self.timestamp.isoformat()}


class SyncOrchestrator:
    """Drives a sync run across all configured feeds."""

    def __init__(
        self,
        feeds: Iterable[FeedConfig],
        store: ArticleStore,
        settings: Optional[SyncSettings] = None,
        fetcher: Optional[FeedFetcher] = None,
        parser: Optional[FeedParser] = None,
        normalizer: Optional[ArticleNormalizer] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Initialize sync orchestrator."""
        self.feeds = list(feeds)
        self.store = store
        self.settings = settings or SyncSettings()
        self.fetcher = fetcher or FeedFetcher(
            timeout=self.settings.fetch_timeout,
            user_agent=self.settings.user_agent,
        )
        self.parser = parser or FeedParser()
        self.normalizer = normalizer or ArticleNormalizer()
        self.freshness = FreshnessFilter.from_hours(self.settings.retention_hours)
        self.clock = clock or utc_now

    def _normalize_all(self, feed: FeedConfig, items, now: datetime) -> FeedResult:
        drafts: List[ArticleDraft] = []
        discarded = 0
        for item in items:
            try:
                draft = self.normalizer.normalize(item, feed, now)
            except ValidationError as e:
                console.print(f"[yellow]Skipping item from {feed.name}: {e}[/yellow]")
                draft = None
            if draft is None:
                discarded += 1
                continue
            drafts.append(draft)

        fresh = self.freshness.apply(drafts, now)
        return FeedResult(
            source_name=feed.name,
            source_url=feed.url,
            success=True,
            articles=fresh,
            item_count=len(items),
            stale_count=len(drafts) - len(fresh),
            discarded_count=discarded,
        )

    async def sync_feed(self, feed: FeedConfig, now: datetime) -> FeedResult:
        """Fetch, parse and normalize one feed; failures stay inside this feed."""
        try:
            raw = await self.fetcher.fetch_and_validate(feed.url)
            items = await asyncio.to_thread(self.parser.parse, raw, feed.url)
            return self._normalize_all(feed, items, now)
        except IngestionError as e:
            error = str(e)
        except Exception as e:
            error = f"Unexpected error: {e}"

        console.print(f"[red]Error syncing feed {feed.name} ({feed.url}): {error}[/red]")
        return FeedResult(
            source_name=feed.name,
            source_url=feed.url,
            success=False,
            error=error,
        )

    async def fetch_all_feeds(self, now: datetime) -> List[FeedResult]:
        """Sync every enabled feed concurrently and wait for all of them to settle."""
        enabled_feeds = [f for f in self.feeds if f.enabled]

        if not enabled_feeds:
            return []

        semaphore = asyncio.Semaphore(self.settings.max_concurrent)

        async def sync_with_semaphore(feed: FeedConfig) -> FeedResult:
            async with semaphore:
                return await self.sync_feed(feed, now)

        tasks = [asyncio.create_task(sync_with_semaphore(feed)) for feed in enabled_feeds]
        _, pending = await asyncio.wait(tasks, timeout=self.settings.run_timeout)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        results = []
        for feed, task in zip(enabled_feeds, tasks):
            if task in pending:
                console.print(f"[red]Feed {feed.name} ({feed.url}) did not finish before the deadline[/red]")
                results.append(
                    FeedResult(
                        source_name=feed.name,
                        source_url=feed.url,
                        success=False,
                        error="Sync deadline exceeded",
                    )
                )
            else:
                results.append(task.result())
        return results

    async def run_sync(self) -> SyncResult:
        """
        Run one sync pass.

        Per-feed failures are reported and skipped. StorageError from the
        upsert propagates to the caller.

        Returns:
            SyncResult with the number of articles submitted and completion time
        """
        now = self.clock()

        feed_results = await self.fetch_all_feeds(now)

        articles: List[ArticleDraft] = []
        for result in feed_results:
            articles.extend(result.articles)

        articles.sort(key=lambda a: a.published_at, reverse=True)

        stats = UpsertStats(total=len(articles))
        if articles:
            stats = await asyncio.to_thread(self.store.upsert_articles, articles)

        return SyncResult(
            count=len(articles),
            timestamp=self.clock(),
            started_at=now,
            new=stats.new,
            duplicates=stats.duplicates,
            feeds=feed_results,
        )

    def run_sync_blocking(self) -> SyncResult:
        """Synchronous wrapper for run_sync."""
        return asyncio.run(self.run_sync())


def print_sync_summary(result: SyncResult, out: Optional[Console] = None) -> None:
    """Print a per-feed table and totals for a sync run."""
    out = out or console

    table = Table(title="Sync Summary")
    table.add_column("Feed", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Items", style="yellow", justify="right")
    table.add_column("Fresh", style="green", justify="right")
    table.add_column("Details", style="dim")

    for feed in result.feeds:
        status = "[green]✓[/green]" if feed.success else "[red]✗[/red]"
        if feed.success:
            details = f"{feed.stale_count} stale, {feed.discarded_count} without link"
        else:
            details = feed.error or "Failed"
        table.add_row(
            feed.source_name,
            status,
            str(feed.item_count) if feed.success else "-",
            str(len(feed.articles)) if feed.success else "-",
            details,
        )

    out.print(table)

    style = "green" if result.feeds_failed == 0 else "yellow"
    out.print(
        Panel(
            f"Submitted: {result.count} articles\n"
            f"New: {result.new} • Duplicates: {result.duplicates}\n"
            f"Feeds failed: {result.feeds_failed} of {len(result.feeds)}\n"
            f"Completed: {result.timestamp.isoformat()}",
            style=style,
        )
    )
