"""Manual play queue.

A user-curated FIFO of track references that takes priority over automatic
sequencing. The queue never owns tracks; playlists do. Queue positions are
derived from the queue's own ordering through an id -> position map that
only this class writes.
"""

from collections import deque
from collections.abc import Iterable, Iterator

from setlist.domain.entities import Track

NOT_QUEUED = -1


class PlaybackQueue:
    """FIFO of tracks with contiguous 1-based positions."""

    def __init__(self, tracks: Iterable[Track] = ()) -> None:
        self._tracks: deque[Track] = deque()
        self._positions: dict[str, int] = {}
        self.enqueue_all(tracks)

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(list(self._tracks))

    def __contains__(self, track: object) -> bool:
        return isinstance(track, Track) and track.id in self._positions

    def __repr__(self) -> str:
        return f"PlaybackQueue({[t.id for t in self._tracks]!r})"

    def is_empty(self) -> bool:
        return not self._tracks

    def enqueue(self, track: Track) -> bool:
        """Append a track; a track that is already queued is left in place.

        Returns:
            True if the track was added
        """
        if track.id in self._positions:
            return False
        self._tracks.append(track)
        self._renumber()
        return True

    def enqueue_all(self, tracks: Iterable[Track]) -> int:
        added = 0
        for track in tracks:
            if track.id in self._positions:
                continue
            self._tracks.append(track)
            self._positions[track.id] = len(self._tracks)
            added += 1
        return added

    def peek(self) -> Track | None:
        return self._tracks[0] if self._tracks else None

    def dequeue_next(self) -> Track | None:
        """Pop the head of the queue, or None when empty."""
        if not self._tracks:
            return None
        track = self._tracks.popleft()
        self._renumber()
        return track

    def discard(self, track: Track) -> bool:
        """Drop every reference to a track. Returns True if it was queued."""
        return self.discard_all([track]) > 0

    def discard_all(self, tracks: Iterable[Track]) -> int:
        doomed = {track.id for track in tracks} & self._positions.keys()
        if not doomed:
            return 0
        self._tracks = deque(t for t in self._tracks if t.id not in doomed)
        self._renumber()
        return len(doomed)

    def clear(self) -> list[Track]:
        """Empty the queue, returning the tracks that were queued."""
        cleared = list(self._tracks)
        self._tracks.clear()
        self._positions.clear()
        return cleared

    def position_of(self, track: Track | None) -> int:
        """1-based queue position of a track, or -1 when not queued."""
        if track is None:
            return NOT_QUEUED
        return self._positions.get(track.id, NOT_QUEUED)

    def positions(self) -> dict[str, int]:
        """Snapshot of track id -> queue position."""
        return dict(self._positions)

    def _renumber(self) -> None:
        self._positions = {track.id: i for i, track in enumerate(self._tracks, start=1)}
