"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .posts import latest_command, random_command

app = typer.Typer(
    name="wpfeed",
    help="wpfeed - Latest WordPress blog posts, ready for display",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("latest")(latest_command)
app.command("random")(random_command)


if __name__ == "__main__":
    app()
