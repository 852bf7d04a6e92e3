"""Track-related domain entities.

Pure track representations with zero external dependencies.
"""

from typing import Any
from uuid import uuid4

import attrs
from attrs import define, field, validators


def _new_track_id() -> str:
    return uuid4().hex


@define(frozen=True, slots=True)
class Track:
    """Immutable track entity representing an addressable audio item.

    Identity is the opaque ``id``; two tracks with the same id are the same
    track regardless of metadata. Queue state is not stored here, the
    playback queue derives positions from its own ordering.
    """

    location: str = field(eq=False, validator=validators.instance_of(str))
    title: str | None = field(default=None, eq=False)
    artist: str | None = field(default=None, eq=False)
    album: str | None = field(default=None, eq=False)
    duration_ms: int | None = field(default=None, eq=False)
    id: str = field(factory=_new_track_id, validator=validators.instance_of(str))

    @location.validator
    def _check_location(self, attribute, value: str) -> None:
        if not value.strip():
            raise ValueError("Track location must not be empty")

    @property
    def display_title(self) -> str:
        """Title for display, falling back to the file name of the location."""
        if self.title:
            return self.title
        return self.location.replace("\\", "/").rsplit("/", 1)[-1]

    def with_metadata(self, **changes: Any) -> "Track":
        """Create a new track with updated metadata, keeping the identity."""
        changes.pop("id", None)
        return attrs.evolve(self, **changes)


@define(frozen=True)
class TrackList:
    """Ephemeral, immutable collection of tracks for processing pipelines.

    Unlike Playlists, TrackLists are not persisted entities but rather
    intermediate artifacts, such as the visible ordering of a playlist.
    """

    tracks: list[Track] = field(factory=list)
    metadata: dict[str, Any] = field(factory=dict)

    def with_tracks(self, tracks: list[Track]) -> "TrackList":
        """Create new TrackList with the given tracks."""
        return self.__class__(
            tracks=tracks,
            metadata=self.metadata.copy(),
        )

    def with_metadata(self, key: str, value: Any) -> "TrackList":
        """Add metadata to the TrackList."""
        new_metadata = self.metadata.copy()
        new_metadata[key] = value
        return self.__class__(tracks=self.tracks, metadata=new_metadata)

    @classmethod
    def from_playlist(cls, playlist: Any) -> "TrackList":  # Avoiding circular import
        """Create TrackList from a Playlist."""
        return cls(
            tracks=list(playlist.tracks),
            metadata={"source_playlist_name": playlist.name},
        )
