"""Playlist domain entity.

Pure playlist representation with zero external dependencies.
"""

from collections.abc import Iterable, Iterator

from attrs import define, field, validators

from .track import Track


@define(eq=False, slots=True)
class Playlist:
    """Playlists are persistent, named, ordered collections of tracks.

    Unlike Tracks, a Playlist is mutable and compared by identity: the
    manager hands out the same object for its whole lifetime, and the
    sequencer navigates its current contents. Track order is significant and
    becomes the persisted ordering key of each track.

    A track appears at most once in a playlist.
    """

    name: str = field(validator=validators.instance_of(str))
    tracks: list[Track] = field(factory=list)
    # The internal database ID, assigned on first save
    id: int | None = field(default=None)
    # Position among sibling playlists, written on save
    position: int = field(default=0)

    def __attrs_post_init__(self) -> None:
        self.tracks = _unique(self.tracks)

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(list(self.tracks))

    def __repr__(self) -> str:
        return f"Playlist(name={self.name!r}, id={self.id!r}, tracks={len(self.tracks)})"

    @property
    def track_count(self) -> int:
        """Number of tracks currently owned by this playlist."""
        return len(self.tracks)

    def contains(self, track: Track) -> bool:
        return self.index_of(track) != -1

    def index_of(self, track: Track | None) -> int:
        """Storage index of a track, or -1 when absent."""
        if track is None:
            return -1
        for index, candidate in enumerate(self.tracks):
            if candidate.id == track.id:
                return index
        return -1

    def get(self, index: int) -> Track:
        return self.tracks[index]

    def rename(self, name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Playlist name must be a non-empty string")
        self.name = name

    def add_tracks(self, tracks: Iterable[Track], at: int | None = None) -> list[Track]:
        """Insert tracks at ``at`` (append when None), skipping ones already present.

        Returns:
            The tracks that were actually added, in order.
        """
        existing = {track.id for track in self.tracks}
        added = []
        for track in tracks:
            if track.id in existing:
                continue
            existing.add(track.id)
            added.append(track)

        if at is None or at >= len(self.tracks):
            self.tracks.extend(added)
        else:
            at = max(at, 0)
            self.tracks[at:at] = added
        return added

    def remove_tracks(self, tracks: Iterable[Track]) -> list[Track]:
        """Remove tracks from the playlist.

        Returns:
            The tracks that were actually removed, in playlist order.
        """
        doomed = {track.id for track in tracks}
        removed = [track for track in self.tracks if track.id in doomed]
        self.tracks = [track for track in self.tracks if track.id not in doomed]
        return removed

    def clear(self) -> list[Track]:
        """Remove every track and return them."""
        removed, self.tracks = self.tracks, []
        return removed


def _unique(tracks: Iterable[Track]) -> list[Track]:
    seen = set()
    unique = []
    for track in tracks:
        if track.id not in seen:
            seen.add(track.id)
            unique.append(track)
    return unique
