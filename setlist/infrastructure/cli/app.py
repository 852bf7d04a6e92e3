"""setlist CLI - Main application entry point and app structure."""

import asyncio
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

from rich.console import Console
import typer

from setlist.config import get_logger, settings, setup_loguru_logger
from setlist.infrastructure.cli import order_commands, playlist_commands, track_commands
from setlist.infrastructure.cli.ui import command_error_handler
from setlist.infrastructure.persistence.database.db_connection import dispose_engine
from setlist.infrastructure.persistence.database.db_models import init_db

try:
    VERSION = version("setlist")
except PackageNotFoundError:
    VERSION = "0.0.0"

# Initialize console and logger with reasonable width
console = Console(width=80)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"🎵 setlist v{VERSION} - Playlists and playback order",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

app.add_typer(
    playlist_commands.app,
    name="playlist",
    help="Create, order and inspect playlists",
    rich_help_panel="🎵 Playlists",
)
app.add_typer(
    track_commands.app,
    name="track",
    help="Manage playlist tracks",
    rich_help_panel="🎵 Playlists",
)
app.add_typer(
    order_commands.app,
    name="order",
    help="Query playback order",
    rich_help_panel="▶️ Playback",
)


@app.command(name="init-db", rich_help_panel="⚙️ System")
@command_error_handler
def initialize_database() -> None:
    """Initialize the database schema.

    Creates tables that don't yet exist; existing tables are left untouched.
    """

    async def run() -> None:
        try:
            await init_db()
        finally:
            await dispose_engine()

    with console.status("[bold blue]Initializing database schema..."):
        asyncio.run(run())

    console.print("\n[bold green]✓ Database schema initialized successfully[/bold green]")
    logger.info("Database initialization completed successfully")


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(f"[bold bright_blue]🎵 setlist[/bold bright_blue] [dim]v{VERSION}[/dim]")


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize setlist CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_loguru_logger(verbose)
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
