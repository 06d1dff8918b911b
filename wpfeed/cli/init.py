"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import ConfigModel, save_config
from ..config.loader import DEFAULT_CONFIG_PATH
from ..db import close_connection_pool, validate_connection

console = Console()

PASSWORD_ENV = "WPFEED_DB_PASSWORD"


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file to write",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("wordpress", "--db-name", help="Database name"),
    db_user: str = typer.Option("wordpress", "--db-user", help="Database user"),
    table_prefix: str = typer.Option("aa_", "--table-prefix", help="WordPress table prefix"),
    check: bool = typer.Option(
        True,
        "--check/--no-check",
        help="Test the database connection after writing the config",
    ),
) -> None:
    """Write a wpfeed configuration file and test the database connection."""
    console.print(Panel.fit("wpfeed - Initialization", style="bold blue"))

    try:
        config = ConfigModel(
            postgres={
                "host": db_host,
                "port": db_port,
                "database": db_name,
                "user": db_user,
                "password_env": PASSWORD_ENV,
            },
            blog={"table_prefix": table_prefix},
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if not check:
        return

    console.print("\n[bold]Testing database connection...[/bold]")
    try:
        ok = validate_connection(config.postgres.model_dump())
    finally:
        close_connection_pool()

    if not ok:
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            f"Set the password via environment variable: [bold]export {PASSWORD_ENV}=your_password[/bold]"
        )
        raise typer.Exit(1)

    console.print("✅ Database connection successful")
