"""Track membership commands."""

import asyncio
from typing import Annotated

from rich.console import Console
import typer

from setlist.domain.entities import Track
from setlist.infrastructure.cli.async_helpers import playback_session
from setlist.infrastructure.cli.playlist_commands import require_playlist
from setlist.infrastructure.cli.ui import command_error_handler

console = Console()

app = typer.Typer(help="Add tracks to and remove tracks from playlists")


@app.command()
@command_error_handler
def add(
    playlist_name: Annotated[str, typer.Argument(help="Target playlist")],
    locations: Annotated[
        list[str], typer.Argument(help="Track locations (paths or URLs)")
    ],
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Title, when adding a single track"),
    ] = None,
    artist: Annotated[
        str | None, typer.Option("--artist", "-a", help="Artist for added tracks")
    ] = None,
) -> None:
    """Append tracks to the end of a playlist."""
    if title is not None and len(locations) > 1:
        raise typer.BadParameter("--title can only be used with a single location")

    tracks = [
        Track(location=location, title=title, artist=artist) for location in locations
    ]

    async def run() -> int:
        async with playback_session(save=True) as service:
            playlist = require_playlist(service.manager, playlist_name)
            return len(service.manager.add_tracks(playlist, tracks))

    added = asyncio.run(run())
    console.print(f"[green]✓ Added {added} tracks to[/green] [bold]{playlist_name}[/bold]")


@app.command()
@command_error_handler
def remove(
    playlist_name: Annotated[str, typer.Argument(help="Playlist to edit")],
    positions: Annotated[
        list[int], typer.Argument(help="Track positions to remove (1-based)")
    ],
) -> None:
    """Remove tracks from a playlist by position."""

    async def run() -> int:
        async with playback_session(save=True) as service:
            playlist = require_playlist(service.manager, playlist_name)
            size = playlist.track_count
            for position in positions:
                if not 1 <= position <= size:
                    raise IndexError(
                        f"Track position {position} out of range (1..{size})"
                    )
            doomed = [playlist.get(position - 1) for position in positions]
            return len(service.manager.remove_tracks(playlist, doomed))

    removed = asyncio.run(run())
    console.print(
        f"[green]✓ Removed {removed} tracks from[/green] [bold]{playlist_name}[/bold]"
    )
