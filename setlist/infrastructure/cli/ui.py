"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable, Sequence
import functools
from typing import ParamSpec, TypeVar

from rich.console import Console
from rich.table import Table
import typer

from setlist.config import get_logger
from setlist.domain.entities import Playlist, Track
from setlist.domain.playback import NOT_QUEUED, PlaybackQueue

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


def display_playlists(playlists: Sequence[Playlist], current: Playlist | None) -> None:
    """Render the playlist set in order, marking the current one."""
    table = Table(title="Playlists")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Tracks", style="green", justify="right")
    table.add_column("Current", justify="center")

    for position, playlist in enumerate(playlists, 1):
        table.add_row(
            str(position),
            playlist.name,
            str(playlist.track_count),
            "●" if playlist is current else "",
        )

    console.print(table)


def display_tracks(
    playlist: Playlist,
    tracks: Sequence[Track] | None = None,
    queue: PlaybackQueue | None = None,
) -> None:
    """Render tracks of a playlist, with queue positions when a queue is given."""
    tracks = playlist.tracks if tracks is None else tracks
    table = Table(title=f"{playlist.name} ({len(tracks)} tracks)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Artist", style="cyan")
    table.add_column("Album", style="yellow")
    table.add_column("Location", style="dim")
    if queue is not None:
        table.add_column("Queue", justify="right")

    for position, track in enumerate(tracks, 1):
        row = [
            str(position),
            track.display_title,
            track.artist or "—",
            track.album or "—",
            track.location,
        ]
        if queue is not None:
            queued = queue.position_of(track)
            row.append(str(queued) if queued != NOT_QUEUED else "")
        table.add_row(*row)

    console.print(table)


def display_track_choice(label: str, track: Track | None, index: int = -1) -> None:
    """Print the outcome of a next/previous query."""
    if track is None:
        console.print(f"[yellow]No {label} track[/yellow]")
        return
    where = f" [dim](#{index + 1})[/dim]" if index >= 0 else ""
    console.print(
        f"[bold]{label.capitalize()}:[/bold] [green]{track.display_title}[/green]{where}"
    )
