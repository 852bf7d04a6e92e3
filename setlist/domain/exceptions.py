"""Domain exceptions.

"No next/previous track" is a normal outcome and never raised; these cover
storage failures and programmer errors only.
"""


class SetlistError(Exception):
    """Base class for all setlist errors."""


class PersistenceError(SetlistError):
    """A storage-layer call failed (I/O, integrity, encoding)."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class PlaylistNotFoundError(SetlistError, LookupError):
    """Playlist is unknown to the store or not managed by the manager."""

    def __init__(self, playlist: object) -> None:
        super().__init__(f"Playlist not found: {playlist}")
        self.playlist = playlist


class InvalidPlaybackModeError(SetlistError, ValueError):
    """Text could not be parsed into a playback mode."""
