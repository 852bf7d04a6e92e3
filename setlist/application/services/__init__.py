"""Application services - playback sequencing and playlist set coordination."""

from .observers import (
    CompositePlaybackObserver,
    LoggingPlaybackObserver,
    NoOpPlaybackObserver,
    PlaybackObserver,
)
from .playback_service import PlaybackService, create_playback_service
from .player_bridge import PlayerEventBridge
from .playlist_manager import CURRENT_PLAYLIST_KEY, PlaylistManager
from .playlist_view import PlaylistView
from .sequencer import PlaybackSequencer, VisibleOrdering

__all__ = [
    "CURRENT_PLAYLIST_KEY",
    "CompositePlaybackObserver",
    "LoggingPlaybackObserver",
    "NoOpPlaybackObserver",
    "PlaybackObserver",
    "PlaybackSequencer",
    "PlaybackService",
    "PlayerEventBridge",
    "PlaylistManager",
    "PlaylistView",
    "VisibleOrdering",
    "create_playback_service",
]
