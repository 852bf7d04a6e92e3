"""Playback order queries.

These commands answer "what would play next/previously" for a track of a
playlist without changing anything that is stored.
"""

import asyncio
import random
from typing import Annotated

import typer

from setlist.application.services.playlist_view import SORTABLE_FIELDS
from setlist.domain.entities import Track
from setlist.domain.playback import PlaybackMode
from setlist.infrastructure.cli.async_helpers import playback_session
from setlist.infrastructure.cli.playlist_commands import require_playlist
from setlist.infrastructure.cli.ui import command_error_handler, display_track_choice

app = typer.Typer(help="Ask the sequencer which track plays next or previously")

ModeOption = Annotated[
    str | None,
    typer.Option(
        "--mode",
        "-m",
        help="Playback mode: default, repeat, repeat-track or shuffle",
    ),
]
SeedOption = Annotated[
    int | None, typer.Option("--seed", help="Seed for reproducible shuffle")
]
FilterOption = Annotated[
    str | None,
    typer.Option(
        "--filter", "-f", help="Only navigate tracks matching this case-insensitive regex"
    ),
]
SortOption = Annotated[
    str | None,
    typer.Option(
        "--sort",
        "-s",
        help=f"Navigate in order of a track attribute: {', '.join(SORTABLE_FIELDS)}",
    ),
]


def _resolve(
    direction: str,
    playlist_name: str,
    position: int,
    mode: str | None,
    seed: int | None,
    text: str | None,
    sort: str | None,
) -> None:
    # Parse up front so a bad mode fails before touching the database
    parsed_mode = PlaybackMode.parse(mode) if mode is not None else None

    async def run() -> tuple[Track | None, int]:
        async with playback_session(
            rng=random.Random(seed) if seed is not None else None,
            mode=parsed_mode,
        ) as service:
            playlist = require_playlist(service.manager, playlist_name)
            if not 1 <= position <= playlist.track_count:
                raise IndexError(
                    f"Track position {position} out of range (1..{playlist.track_count})"
                )
            current = playlist.get(position - 1)

            service.select_playlist(playlist)
            service.view.set_text_filter(text)
            service.view.set_sort(sort)

            if direction == "next":
                track = service.next_track(current)
            else:
                track = service.previous_track(current)
            return track, playlist.index_of(track)

    track, index = asyncio.run(run())
    display_track_choice(direction, track, index)


@app.command(name="next")
@command_error_handler
def next_track(
    playlist_name: Annotated[str, typer.Argument(help="Playlist to navigate")],
    position: Annotated[int, typer.Argument(help="Current track position (1-based)")],
    mode: ModeOption = None,
    seed: SeedOption = None,
    text: FilterOption = None,
    sort: SortOption = None,
) -> None:
    """Show the track that would play after the given one."""
    _resolve("next", playlist_name, position, mode, seed, text, sort)


@app.command(name="prev")
@command_error_handler
def previous_track(
    playlist_name: Annotated[str, typer.Argument(help="Playlist to navigate")],
    position: Annotated[int, typer.Argument(help="Current track position (1-based)")],
    mode: ModeOption = None,
    seed: SeedOption = None,
    text: FilterOption = None,
    sort: SortOption = None,
) -> None:
    """Show the track that would play before the given one."""
    _resolve("previous", playlist_name, position, mode, seed, text, sort)
