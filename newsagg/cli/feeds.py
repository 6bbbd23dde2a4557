"""Feed management commands."""

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, FeedConfig, load_feeds, save_feeds
from ..errors import IngestionError
from ..ingestion import FeedFetcher, FeedParser
from ..models import Language

console = Console()
feeds_app = typer.Typer(help="Manage RSS feeds")


def _load_or_exit(config: Config) -> List[FeedConfig]:
    try:
        return load_feeds(config.feeds_path)
    except FileNotFoundError:
        console.print("[red]Feeds file not found. Run 'newsagg init' first.[/red]")
        raise typer.Exit(1)


@feeds_app.command("list")
def feeds_list() -> None:
    """List all configured feeds."""
    feeds = _load_or_exit(Config())

    if not feeds:
        console.print("[yellow]No feeds configured.[/yellow]")
        return

    table = Table(title="Configured Feeds")
    table.add_column("Name", style="cyan")
    table.add_column("Language", style="magenta")
    table.add_column("Enabled", style="yellow")
    table.add_column("URL", style="blue")

    for feed in feeds:
        table.add_row(
            feed.name,
            feed.language.value,
            "✓" if feed.enabled else "✗",
            feed.url,
        )

    console.print(table)


@feeds_app.command("add")
def feeds_add(
    name: str = typer.Option(..., "--name", "-n", help="Publisher label"),
    url: str = typer.Option(..., "--url", "-u", help="RSS feed URL"),
    language: Language = typer.Option(Language.EN, "--language", "-l", help="Feed language"),
) -> None:
    """Add a new RSS feed."""
    config = Config()

    try:
        feeds = load_feeds(config.feeds_path)
    except FileNotFoundError:
        feeds = []

    if any(f.name == name or f.url == url for f in feeds):
        console.print(f"[red]Feed '{name}' or URL already exists.[/red]")
        raise typer.Exit(1)

    feeds.append(FeedConfig(name=name, url=url, language=language, enabled=True))
    save_feeds(feeds, config.feeds_path)

    console.print(f"[green]✅ Added feed: {name}[/green]")


@feeds_app.command("remove")
def feeds_remove(
    name: str = typer.Argument(..., help="Feed name to remove"),
) -> None:
    """Remove a feed."""
    config = Config()
    feeds = _load_or_exit(config)

    original_count = len(feeds)
    feeds = [f for f in feeds if f.name != name]

    if len(feeds) == original_count:
        console.print(f"[red]Feed '{name}' not found.[/red]")
        raise typer.Exit(1)

    save_feeds(feeds, config.feeds_path)
    console.print(f"[green]✅ Removed feed: {name}[/green]")


async def _probe(fetcher: FeedFetcher, parser: FeedParser, feed: FeedConfig) -> str:
    raw = await fetcher.fetch_and_validate(feed.url)
    items = parser.parse(raw, feed.url)
    return f"{len(items)} items"


@feeds_app.command("test")
def feeds_test(
    name: Optional[str] = typer.Argument(None, help="Feed name to test (or test all)"),
) -> None:
    """Fetch, validate and parse feeds without storing anything."""
    config = Config()
    feeds = _load_or_exit(config)

    if name:
        feeds = [f for f in feeds if f.name == name]
        if not feeds:
            console.print(f"[red]Feed '{name}' not found.[/red]")
            raise typer.Exit(1)

    settings = config.get_sync_settings() if config.config_path.exists() else None
    if settings is not None:
        fetcher = FeedFetcher(timeout=settings.fetch_timeout, user_agent=settings.user_agent)
    else:
        fetcher = FeedFetcher()
    parser = FeedParser()

    for feed in feeds:
        if not feed.enabled:
            console.print(f"[yellow]⚠️  {feed.name}: Disabled[/yellow]")
            continue

        try:
            details = asyncio.run(_probe(fetcher, parser, feed))
            console.print(f"[green]✅ {feed.name}: OK ({details})[/green]")
        except IngestionError as e:
            console.print(f"[red]❌ {feed.name}: Failed - {e}[/red]")
