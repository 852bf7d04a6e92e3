"""setlist domain layer - pure playlist and playback-order logic."""

from . import entities, playback, transforms

from .entities import Playlist, Track, TrackList
from .exceptions import (
    InvalidPlaybackModeError,
    PersistenceError,
    PlaylistNotFoundError,
    SetlistError,
)
from .playback import (
    NOT_QUEUED,
    PlaybackMode,
    PlaybackQueue,
    resolve_next,
    resolve_prev,
)

__all__ = [
    # Modules
    "entities",
    "playback",
    "transforms",
    # Key domain types
    "Playlist",
    "Track",
    "TrackList",
    # Playback
    "NOT_QUEUED",
    "PlaybackMode",
    "PlaybackQueue",
    "resolve_next",
    "resolve_prev",
    # Errors
    "InvalidPlaybackModeError",
    "PersistenceError",
    "PlaylistNotFoundError",
    "SetlistError",
]
