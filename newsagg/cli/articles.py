"""Article query commands."""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import Config
from ..db import ArticleFilters, ArticleStorage, close_connection_pool
from ..errors import StorageError
from ..models import Category, Language

console = Console()
articles_app = typer.Typer(help="Query stored articles")


@articles_app.command("list")
def articles_list(
    category: Optional[Category] = typer.Option(None, "--category", "-c", help="Filter by category"),
    language: Optional[Language] = typer.Option(None, "--language", "-l", help="Filter by language"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search title and summary"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum articles", min=1, max=500),
) -> None:
    """List stored articles, newest first."""
    store = ArticleStorage.from_config(Config().get_db_config())
    filters = ArticleFilters(category=category, language=language, search=search, limit=limit)

    try:
        articles = store.list_articles(filters)
    except StorageError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()

    if not articles:
        console.print("[yellow]No articles found.[/yellow]")
        return

    table = Table(title=f"Articles ({len(articles)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Published", style="yellow")
    table.add_column("Category", style="magenta")
    table.add_column("Source", style="cyan")
    table.add_column("Title")

    for article in articles:
        table.add_row(
            str(article.id),
            article.published_at.strftime("%Y-%m-%d %H:%M"),
            article.category.value,
            article.source,
            article.title,
        )

    console.print(table)


@articles_app.command("show")
def articles_show(
    article_id: int = typer.Argument(..., help="Article ID"),
) -> None:
    """Show a single article."""
    store = ArticleStorage.from_config(Config().get_db_config())

    try:
        article = store.get_article(article_id)
    except StorageError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()

    if article is None:
        console.print(f"[red]Article {article_id} not found.[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[bold]{article.title}[/bold]\n\n"
            f"{article.summary}\n\n"
            f"Source: {article.source} ({article.language.value})\n"
            f"Category: {article.category.value}\n"
            f"Published: {article.published_at.isoformat()}\n"
            f"URL: {article.url}\n"
            f"Image: {article.image_url or '-'}",
            title=f"Article {article.id}",
        )
    )
