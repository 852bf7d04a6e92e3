"""
Pure functional transformations for track lists.

This module contains immutable, side-effect free functions that build the
visible ordering of a playlist: the filtered and sorted view that playback
sequencing navigates.

Transformations follow functional programming principles:
- Immutability: All operations return new objects instead of modifying existing ones
- Composition: Transformations can be combined to form pipelines
- Currying: Functions are designed to work with partial application
"""

from collections.abc import Callable
import re
from typing import Any

from toolz import compose_left, curry, identity

from setlist.config import get_logger
from setlist.domain.entities.track import Track, TrackList

logger = get_logger(__name__)

# Type alias for transformation functions
Transform = Callable[[TrackList], TrackList]

# Track attributes searched by text filters
SEARCHABLE_ATTRIBUTES = ("title", "artist", "album", "location")


# === Core Pipeline Functions ===


def create_pipeline(*operations: Transform) -> Transform:
    """
    Compose multiple transformations into a single operation.

    Args:
        *operations: Transformation functions to compose

    Returns:
        A single transformation function combining all operations
    """
    if not operations:
        return identity
    return compose_left(*operations)


# === Track Filtering ===


@curry
def filter_by_predicate(
    predicate: Callable[[Track], bool],
    tracklist: TrackList | None = None,
) -> Transform | TrackList:
    """
    Filter tracks based on a predicate function.

    Args:
        predicate: Function returning True for tracks to keep
        tracklist: Optional tracklist to transform immediately

    Returns:
        Transformation function or transformed tracklist if provided
    """

    def transform(t: TrackList) -> TrackList:
        filtered = [track for track in t.tracks if predicate(track)]
        return t.with_tracks(filtered).with_metadata(
            "filtered_out", len(t.tracks) - len(filtered)
        )

    if tracklist is not None:
        return transform(tracklist)
    return transform


def matches_text(text: str) -> Callable[[Track], bool]:
    """Build a case-insensitive regex predicate over searchable attributes.

    Text that is not a valid pattern, such as ``"(live"``, is matched
    literally instead.
    """
    needle = text.strip()
    try:
        pattern = re.compile(needle, re.IGNORECASE)
    except re.error:
        logger.debug(f"Filter {needle!r} is not a valid pattern, matching literally")
        pattern = re.compile(re.escape(needle), re.IGNORECASE)

    def predicate(track: Track) -> bool:
        if not needle:
            return True
        return any(
            pattern.search(value)
            for value in (getattr(track, attr) for attr in SEARCHABLE_ATTRIBUTES)
            if value
        )

    return predicate


@curry
def filter_by_text(
    text: str,
    tracklist: TrackList | None = None,
) -> Transform | TrackList:
    """Keep tracks whose title, artist, album or location matches ``text``."""
    transform = filter_by_predicate(matches_text(text))
    return transform(tracklist) if tracklist is not None else transform


# === Track Ordering ===


@curry
def sort_by_attribute(
    key_fn: Callable[[Track], Any] | str,
    reverse: bool = False,
    tracklist: TrackList | None = None,
) -> Transform | TrackList:
    """Sort tracks by any attribute or derived value.

    Tracks whose key is None always sort after the others, in either
    direction. The sort is stable, so equal keys keep playlist order.

    Args:
        key_fn: Function to extract sort key or track attribute name
        reverse: Whether to sort in descending order
        tracklist: Optional tracklist to transform immediately

    Returns:
        Transformation function or transformed tracklist if provided
    """
    if isinstance(key_fn, str):
        attribute = key_fn

        def attribute_key(track: Track) -> Any:
            value = getattr(track, attribute, None)
            return value.casefold() if isinstance(value, str) else value

        extract = attribute_key
        sort_name = attribute
    else:
        extract = key_fn
        sort_name = getattr(key_fn, "__name__", "custom")

    def transform(t: TrackList) -> TrackList:
        keyed = [(extract(track), track) for track in t.tracks]
        present = [pair for pair in keyed if pair[0] is not None]
        missing = [track for key, track in keyed if key is None]
        if present:
            logger.debug(
                f"Sorting {len(present)} tracks by {sort_name}",
                reverse=reverse,
                missing=len(missing),
            )
        ordered = [
            track
            for _, track in sorted(present, key=lambda pair: pair[0], reverse=reverse)
        ]
        return t.with_tracks(ordered + missing).with_metadata("sorted_by", sort_name)

    return transform(tracklist) if tracklist is not None else transform
