"""Post listing commands."""

from pathlib import Path
from typing import Callable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import Config
from ..db import OrderMode, PostRepository, QueryBuilder, close_connection_pool, get_connection
from ..errors import WPFeedError
from ..models import BlogPost

console = Console()


def render_posts(posts: List[BlogPost], title: str) -> Table:
    """Build a table of posts for the terminal."""
    table = Table(title=title)
    table.add_column("Date", style="magenta", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Teaser")
    table.add_column("Image", style="green")
    table.add_column("URL", style="blue")

    for post in posts:
        table.add_row(
            post.date,
            escape(post.title),
            escape(post.teaser),
            escape(post.img_src or ""),
            escape(post.url),
        )

    return table


def _run(config_path: Optional[Path], fetch: Callable[[PostRepository], List[BlogPost]]) -> List[BlogPost]:
    try:
        config = Config(config_path)
        db_config = config.get_db_config()
        blog = config.blog
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}. Run 'wpfeed init' first.[/red]")
        raise typer.Exit(1)

    try:
        with get_connection(db_config) as conn:
            return fetch(PostRepository(QueryBuilder(conn), blog))
    except (WPFeedError, ValueError) as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()


def latest_command(
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of posts"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
) -> None:
    """Show the latest published posts."""
    posts = _run(config_path, lambda repo: repo.get_latest(limit))

    if not posts:
        console.print("[yellow]No published posts found.[/yellow]")
        return

    console.print(render_posts(posts, "Latest Posts"))


def random_command(
    amount: Optional[int] = typer.Option(None, "--amount", "-n", help="Number of posts"),
    order: OrderMode = typer.Option(OrderMode.RANDOM, "--order", "-o", help="Post order"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
) -> None:
    """Show published posts newer than the configured cutoff date."""
    posts = _run(config_path, lambda repo: repo.get_random_posts(amount, order))

    if not posts:
        console.print("[yellow]No published posts found.[/yellow]")
        return

    title = "Random Posts" if order == OrderMode.RANDOM else "Recent Posts"
    console.print(render_posts(posts, title))
