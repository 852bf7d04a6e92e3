"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
"""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Protocol, Self

if TYPE_CHECKING:
    from setlist.domain.entities import Playlist, Track


class PlaylistRepositoryProtocol(Protocol):
    """Repository interface for playlist persistence operations."""

    def list_playlists(self) -> Awaitable[list["Playlist"]]:
        """Load every playlist ordered by position, tracks included."""
        ...

    def get_playlist_by_id(self, playlist_id: int) -> Awaitable["Playlist"]:
        """Get playlist by ID; raises PlaylistNotFoundError."""
        ...

    def save_playlist(self, playlist: "Playlist") -> Awaitable[int]:
        """Insert or update a playlist and its track membership.

        Returns:
            The persisted playlist ID
        """
        ...

    def delete_playlist(self, playlist_id: int) -> Awaitable[None]:
        """Delete a playlist, leaving its tracks unassigned."""
        ...


class TrackRepositoryProtocol(Protocol):
    """Repository interface for track persistence operations."""

    def sync_playlist_tracks(
        self, playlist_id: int, tracks: list["Track"]
    ) -> Awaitable[None]:
        """Make the stored membership and order of a playlist match ``tracks``."""
        ...

    def detach_playlist(self, playlist_id: int) -> Awaitable[int]:
        """Mark every track of a playlist as unassigned."""
        ...

    def find_orphans(self) -> Awaitable[list["Track"]]:
        """Tracks that belong to no playlist."""
        ...

    def delete_orphans(self) -> Awaitable[int]:
        """Delete tracks that belong to no playlist; returns the count."""
        ...


class StateRepositoryProtocol(Protocol):
    """Repository interface for persisted application state scalars."""

    def get_value(self, key: str, default: Any = None) -> Awaitable[Any]:
        """Read a value, or ``default`` when unset."""
        ...

    def set_value(self, key: str, value: Any) -> Awaitable[None]:
        """Write a JSON-serializable value."""
        ...


class UnitOfWorkProtocol(Protocol):
    """Transaction boundary that hands out repositories sharing one session."""

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    def get_playlist_repository(self) -> PlaylistRepositoryProtocol: ...

    def get_track_repository(self) -> TrackRepositoryProtocol: ...

    def get_state_repository(self) -> StateRepositoryProtocol: ...
