"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import articles_app
from .feeds import feeds_app
from .init import init_command
from .sync import sync_command, watch_command

app = typer.Typer(
    name="newsagg",
    help="News Aggregator - bilingual RSS ingestion",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("sync")(sync_command)
app.command("watch")(watch_command)
app.add_typer(feeds_app, name="feeds", help="Manage RSS feeds")
app.add_typer(articles_app, name="articles", help="Query stored articles")


if __name__ == "__main__":
    app()
