"""Playback sequencing: decide which track plays next or previously.

The sequencer composes the manual queue, the order policy and the visible
ordering of the current playlist. "No track to play" is a normal outcome
represented by None, never an exception.
"""

from collections.abc import Iterable, Sequence
import random
from typing import Protocol

from setlist.config import get_logger
from setlist.domain.entities import Track
from setlist.domain.playback import (
    PlaybackMode,
    PlaybackQueue,
    RandomSource,
    resolve_next,
    resolve_prev,
)

from .observers import NoOpPlaybackObserver, PlaybackObserver

logger = get_logger(__name__)


class VisibleOrdering(Protocol):
    """Supplies the post-filter, post-sort track order of the current playlist."""

    def visible_tracks(self) -> Sequence[Track]: ...


def index_in(tracks: Sequence[Track], track: Track | None) -> int:
    """Index of a track (by identity) in an ordering, or -1."""
    if track is None:
        return -1
    for index, candidate in enumerate(tracks):
        if candidate.id == track.id:
            return index
    return -1


class PlaybackSequencer:
    """Answers next/previous queries from the player.

    Args:
        ordering: Source of the current visible ordering
        queue: Manual play queue, shared with the playlist manager
        rng: Random source for shuffle (seed it for reproducible tests)
        observer: Receives queue, mode and last-played notifications
        mode: Initial playback mode
    """

    def __init__(
        self,
        ordering: VisibleOrdering,
        queue: PlaybackQueue | None = None,
        rng: RandomSource | None = None,
        observer: PlaybackObserver | None = None,
        mode: PlaybackMode = PlaybackMode.DEFAULT,
    ) -> None:
        self._ordering = ordering
        self._queue = queue if queue is not None else PlaybackQueue()
        self._rng = rng if rng is not None else random.Random()
        self._observer = observer or NoOpPlaybackObserver()
        self._mode = PlaybackMode.parse(mode)
        self._last_played: Track | None = None

    @property
    def mode(self) -> PlaybackMode:
        return self._mode

    @property
    def queue(self) -> PlaybackQueue:
        return self._queue

    @property
    def last_played(self) -> Track | None:
        return self._last_played

    def set_mode(self, mode: PlaybackMode | str) -> None:
        """Change the policy used by future next/prev calls."""
        mode = PlaybackMode.parse(mode)
        if mode == self._mode:
            return
        logger.debug(f"Playback mode {self._mode} -> {mode}")
        self._mode = mode
        self._observer.mode_changed(mode)

    def set_last_played(self, track: Track | None) -> None:
        """Record the most recently opened track and ask the UI to reveal it."""
        self._last_played = track
        self._observer.last_played_changed(track)

    # -------------------------------------------------------------------------
    # MANUAL QUEUE
    # -------------------------------------------------------------------------

    def enqueue(self, track: Track) -> bool:
        added = self._queue.enqueue(track)
        if added:
            self._notify_queue()
        return added

    def enqueue_all(self, tracks: Iterable[Track]) -> int:
        added = self._queue.enqueue_all(tracks)
        if added:
            self._notify_queue()
        return added

    def clear_queue(self) -> list[Track]:
        cleared = self._queue.clear()
        self._notify_queue()
        return cleared

    def queue_position(self, track: Track) -> int:
        """1-based position of a track in the manual queue, or -1."""
        return self._queue.position_of(track)

    # -------------------------------------------------------------------------
    # NAVIGATION
    # -------------------------------------------------------------------------

    def next(self, current: Track | None) -> Track | None:
        """Track to play after ``current``.

        The manual queue always wins. With nothing loaded (``current`` is
        None) playback resumes at the last played track, or at the top of
        the visible ordering when that track is gone.
        """
        if not self._queue.is_empty():
            track = self._queue.dequeue_next()
            self._notify_queue()
            logger.debug("Next track taken from queue", track_id=track.id)
            return track

        tracks = self._ordering.visible_tracks()
        if current is None:
            return self._bootstrap(tracks)

        index = index_in(tracks, current)
        if index == -1:
            logger.debug("Current track not visible, no next track", track_id=current.id)
            return None

        return self._pick(tracks, resolve_next(index, len(tracks), self._mode, self._rng))

    def prev(self, current: Track | None) -> Track | None:
        """Track to play before ``current``; the manual queue is not consulted."""
        tracks = self._ordering.visible_tracks()
        index = index_in(tracks, current)
        if index == -1:
            return None

        return self._pick(tracks, resolve_prev(index, len(tracks), self._mode, self._rng))

    def _bootstrap(self, tracks: Sequence[Track]) -> Track | None:
        if not tracks:
            return None
        index = index_in(tracks, self._last_played)
        return tracks[index if index != -1 else 0]

    @staticmethod
    def _pick(tracks: Sequence[Track], index: int | None) -> Track | None:
        return tracks[index] if index is not None else None

    def _notify_queue(self) -> None:
        self._observer.queue_changed(self._queue.positions())
