"""Sync and watch command implementations."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..db import ArticleStorage, close_connection_pool
from ..errors import StorageError
from ..pipeline import SyncOrchestrator, print_sync_summary

console = Console()


def build_orchestrator(config: Config) -> SyncOrchestrator:
    """Wire configured feeds, settings and the Postgres store together."""
    try:
        feeds = config.get_feeds()
        settings = config.get_sync_settings()
    except FileNotFoundError as e:
        console.print(f"[red]{e}. Run 'newsagg init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    store = ArticleStorage.from_config(config.get_db_config())
    return SyncOrchestrator(feeds, store, settings=settings)


def sync_command(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print only the {count, timestamp} payload as JSON",
    ),
) -> None:
    """Run one sync pass over all configured feeds."""
    orchestrator = build_orchestrator(Config())

    try:
        result = orchestrator.run_sync_blocking()
    except StorageError as e:
        console.print(f"[red]Sync failed: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Sync interrupted by user[/yellow]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()

    if json_output:
        typer.echo(json.dumps(result.to_payload()))
        return

    print_sync_summary(result, console)


async def watch_loop(
    orchestrator: SyncOrchestrator,
    interval_minutes: float,
    max_runs: Optional[int] = None,
) -> int:
    """Run sync immediately, then every ``interval_minutes``.

    A failed run is reported and the schedule keeps going.

    Returns:
        Number of runs performed
    """
    runs = 0
    while True:
        try:
            result = await orchestrator.run_sync()
            console.print(
                f"[green]{result.timestamp.isoformat()} synced {result.count} articles "
                f"({result.new} new, {result.feeds_failed} feeds failed)[/green]"
            )
        except StorageError as e:
            console.print(f"[red]Sync failed: {e}[/red]")

        runs += 1
        if max_runs is not None and runs >= max_runs:
            return runs
        await asyncio.sleep(interval_minutes * 60)


def watch_command(
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Minutes between sync runs. Default: sync.interval_minutes from config",
        min=0.1,
    ),
    max_runs: Optional[int] = typer.Option(
        None,
        "--max-runs",
        help="Stop after this many runs",
        min=1,
    ),
) -> None:
    """Sync now and then keep syncing on a fixed interval."""
    config = Config()
    orchestrator = build_orchestrator(config)

    if interval is None:
        interval = orchestrator.settings.interval_minutes

    console.print(f"[bold]Syncing {len(orchestrator.feeds)} feeds every {interval:g} minutes[/bold]")

    try:
        asyncio.run(watch_loop(orchestrator, interval, max_runs))
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")
    finally:
        close_connection_pool()
