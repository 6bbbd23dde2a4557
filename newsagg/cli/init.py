"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config, ConfigModel, default_feeds, save_config, save_feeds
from ..config.models import PostgresConfig
from ..db import init_database, validate_connection

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "newsagg",
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("newsagg", "--db-name", help="Database name"),
    db_user: str = typer.Option("newsagg", "--db-user", help="Database user"),
    seed_feeds: bool = typer.Option(
        True,
        "--seed-feeds/--no-seed-feeds",
        help="Seed the default English and Arabic feeds",
    ),
    skip_db: bool = typer.Option(
        False,
        "--skip-db",
        help="Only write configuration files",
    ),
) -> None:
    """Initialize configuration and database schema."""
    console.print(Panel.fit("📰 News Aggregator - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    feeds_path = config_dir / "feeds.yaml"

    config = ConfigModel(
        postgres=PostgresConfig(
            host=db_host,
            port=db_port,
            database=db_name,
            user=db_user,
        ),
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if seed_feeds:
        feeds = default_feeds()
        save_feeds(feeds, feeds_path)
        console.print(f"✅ Created feeds: {feeds_path} (seeded with {len(feeds)} feeds)")
    else:
        save_feeds([], feeds_path)
        console.print(f"✅ Created feeds: {feeds_path} (empty)")

    if skip_db:
        return

    console.print("\n[bold]Testing database connection...[/bold]")
    db_config = Config(config_path).get_db_config()

    if not validate_connection(db_config):
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            "Set the password via [bold]NEWSAGG_DB_PASSWORD[/bold] "
            "or a full URL via [bold]DATABASE_URL[/bold]."
        )
        raise typer.Exit(1)

    console.print("✅ Database connection successful")

    console.print("\n[bold]Initializing database schema...[/bold]")
    try:
        init_database(db_config)
        console.print("✅ Database schema initialized")
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ News Aggregator initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Feeds: {feeds_path}\n\n"
            f"Next steps:\n"
            f"1. Run a single sync: [bold]newsagg sync[/bold]\n"
            f"2. Keep syncing on a schedule: [bold]newsagg watch[/bold]",
            style="green",
        )
    )
