"""Playlist management commands.

Positions shown and accepted here are 1-based, matching the tables the
commands print.
"""

import asyncio
from typing import Annotated

from rich.console import Console
import typer

from setlist.application.services import PlaylistManager
from setlist.config import get_logger
from setlist.domain.entities import Playlist
from setlist.domain.exceptions import PlaylistNotFoundError
from setlist.infrastructure.cli.async_helpers import playback_session
from setlist.infrastructure.cli.ui import (
    command_error_handler,
    display_playlists,
    display_tracks,
)

console = Console()
logger = get_logger(__name__)

app = typer.Typer(help="Create, order and inspect playlists")


def require_playlist(manager: PlaylistManager, name: str) -> Playlist:
    """Look a playlist up by exact name."""
    playlist = manager.find_by_name(name)
    if playlist is None:
        raise PlaylistNotFoundError(name)
    return playlist


@app.command(name="list")
@command_error_handler
def list_playlists() -> None:
    """Show every playlist in order."""

    async def run() -> None:
        async with playback_session() as service:
            display_playlists(service.manager.playlists, service.manager.current)

    asyncio.run(run())


@app.command()
@command_error_handler
def create(
    name: Annotated[str, typer.Argument(help="Name of the new playlist")],
) -> None:
    """Create an empty playlist at the end of the list."""

    async def run() -> Playlist:
        async with playback_session(save=True) as service:
            return await service.manager.add(name)

    playlist = asyncio.run(run())
    console.print(f"[green]✓ Created playlist[/green] [bold]{playlist.name}[/bold]")


@app.command()
@command_error_handler
def delete(
    name: Annotated[str, typer.Argument(help="Playlist to delete")],
) -> None:
    """Delete a playlist; its tracks are removed with it."""

    async def run() -> Playlist | None:
        async with playback_session(save=True) as service:
            await service.manager.remove(require_playlist(service.manager, name))
            return service.manager.current

    current = asyncio.run(run())
    console.print(f"[green]✓ Deleted playlist[/green] [bold]{name}[/bold]")
    if current is not None:
        console.print(f"[dim]Current playlist: {current.name}[/dim]")


@app.command()
@command_error_handler
def rename(
    name: Annotated[str, typer.Argument(help="Playlist to rename")],
    new_name: Annotated[str, typer.Argument(help="New name")],
) -> None:
    """Rename a playlist."""

    async def run() -> None:
        async with playback_session(save=True) as service:
            service.manager.rename(require_playlist(service.manager, name), new_name)

    asyncio.run(run())
    console.print(f"[green]✓ Renamed[/green] {name} → [bold]{new_name}[/bold]")


@app.command()
@command_error_handler
def move(
    from_position: Annotated[int, typer.Argument(help="Current position (1-based)")],
    to_position: Annotated[int, typer.Argument(help="Target position (1-based)")],
) -> None:
    """Drag a playlist to a new position."""

    async def run() -> None:
        async with playback_session(save=True) as service:
            service.manager.move(from_position - 1, to_position - 1)
            display_playlists(service.manager.playlists, service.manager.current)

    asyncio.run(run())


@app.command()
@command_error_handler
def select(
    name: Annotated[str, typer.Argument(help="Playlist to make current")],
) -> None:
    """Make a playlist current; the choice is remembered."""

    async def run() -> None:
        async with playback_session(save=True) as service:
            service.select_playlist(require_playlist(service.manager, name))

    asyncio.run(run())
    console.print(f"[green]✓ Current playlist:[/green] [bold]{name}[/bold]")


@app.command()
@command_error_handler
def show(
    name: Annotated[
        str | None, typer.Argument(help="Playlist to show (defaults to current)")
    ] = None,
) -> None:
    """List the tracks of a playlist."""

    async def run() -> None:
        async with playback_session() as service:
            playlist = (
                require_playlist(service.manager, name)
                if name is not None
                else service.manager.current
            )
            display_tracks(playlist)

    asyncio.run(run())
