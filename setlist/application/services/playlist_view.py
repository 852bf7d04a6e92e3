"""Visible ordering of the current playlist.

The view applies the user's filter and sort on top of the current playlist's
storage order. Its output is what the sequencer navigates, so a track the
user filtered out is never reached by next/prev.
"""

from collections.abc import Callable
from typing import Any, Protocol

import attrs

from setlist.config import get_logger
from setlist.domain.entities import Playlist, Track, TrackList
from setlist.domain.transforms import (
    Transform,
    create_pipeline,
    filter_by_predicate,
    filter_by_text,
    sort_by_attribute,
)

logger = get_logger(__name__)

# Track attribute names accepted as sort keys
SORTABLE_FIELDS = tuple(attrs.fields_dict(Track))


class CurrentPlaylistSource(Protocol):
    @property
    def current(self) -> Playlist | None: ...


class PlaylistView:
    """Filter and sort state over whichever playlist is current."""

    def __init__(self, source: CurrentPlaylistSource) -> None:
        self._source = source
        self._filter: Transform | None = None
        self._sort: Transform | None = None
        self._filter_text: str | None = None
        self._sort_key: str | None = None
        self._sort_reverse = False

    @property
    def filter_text(self) -> str | None:
        return self._filter_text

    @property
    def sort_key(self) -> str | None:
        return self._sort_key

    @property
    def sort_reverse(self) -> bool:
        return self._sort_reverse

    @property
    def is_filtered(self) -> bool:
        return self._filter is not None

    def set_filter(self, predicate: Callable[[Track], bool] | None) -> None:
        """Keep only tracks matching ``predicate``; None removes the filter."""
        self._filter_text = None
        self._filter = filter_by_predicate(predicate) if predicate else None

    def set_text_filter(self, text: str | None) -> None:
        """Case-insensitive search over title, artist, album and location."""
        if not text or not text.strip():
            self._filter_text = None
            self._filter = None
            return
        self._filter_text = text
        self._filter = filter_by_text(text)

    def set_sort(
        self, key: str | Callable[[Track], Any] | None, reverse: bool = False
    ) -> None:
        """Sort by a track attribute or key function; None restores storage order.

        Raises:
            ValueError: If ``key`` names something that is not a track field
        """
        if key is None:
            self._sort_key = None
            self._sort_reverse = False
            self._sort = None
            return
        if isinstance(key, str) and key not in SORTABLE_FIELDS:
            raise ValueError(
                f"Cannot sort by {key!r}; expected one of: {', '.join(SORTABLE_FIELDS)}"
            )
        self._sort_key = key if isinstance(key, str) else getattr(key, "__name__", "custom")
        self._sort_reverse = reverse
        self._sort = sort_by_attribute(key, reverse)

    def reset(self) -> None:
        """Drop filter and sort, for example when another playlist is selected."""
        self.set_filter(None)
        self.set_sort(None)

    def tracklist(self) -> TrackList:
        """The visible ordering with pipeline metadata attached."""
        playlist = self._source.current
        if playlist is None:
            return TrackList()
        pipeline = create_pipeline(
            *(step for step in (self._filter, self._sort) if step is not None)
        )
        return pipeline(TrackList.from_playlist(playlist))

    def visible_tracks(self) -> list[Track]:
        return list(self.tracklist().tracks)

    def index_of(self, track: Track | None) -> int:
        """Index of a track in the visible ordering, or -1 when hidden or absent."""
        if track is None:
            return -1
        for index, candidate in enumerate(self.visible_tracks()):
            if candidate.id == track.id:
                return index
        return -1

    def __len__(self) -> int:
        return len(self.visible_tracks())
