"""Outbound notifications from the sequencer and the playlist manager.

UI layers subscribe by implementing ``PlaybackObserver``; nothing here
depends on a UI toolkit. Observers are called synchronously on the owning
thread after the state change is complete.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from setlist.config import get_logger
from setlist.domain.entities import Playlist, Track
from setlist.domain.playback import PlaybackMode

logger = get_logger(__name__)


class PlaybackObserver(Protocol):
    """Protocol for consumers of playback and playlist-set changes."""

    def queue_changed(self, positions: Mapping[str, int]) -> None:
        """Queue positions changed; ``positions`` maps track id -> position."""
        ...

    def last_played_changed(self, track: Track | None) -> None:
        """A track was opened; the UI should reveal and select it."""
        ...

    def mode_changed(self, mode: PlaybackMode) -> None: ...

    def playlists_changed(self, playlists: Sequence[Playlist]) -> None:
        """The set of playlists or their order changed."""
        ...

    def current_playlist_changed(self, playlist: Playlist | None) -> None: ...


class NoOpPlaybackObserver:
    """No-operation observer for headless/testing scenarios."""

    def queue_changed(self, positions: Mapping[str, int]) -> None:
        pass

    def last_played_changed(self, track: Track | None) -> None:
        pass

    def mode_changed(self, mode: PlaybackMode) -> None:
        pass

    def playlists_changed(self, playlists: Sequence[Playlist]) -> None:
        pass

    def current_playlist_changed(self, playlist: Playlist | None) -> None:
        pass


class LoggingPlaybackObserver:
    """Observer that records every notification at debug level."""

    def queue_changed(self, positions: Mapping[str, int]) -> None:
        logger.debug(f"Queue changed: {len(positions)} queued")

    def last_played_changed(self, track: Track | None) -> None:
        logger.debug(
            "Last played changed",
            track_id=track.id if track else None,
        )

    def mode_changed(self, mode: PlaybackMode) -> None:
        logger.debug(f"Playback mode changed to {mode}")

    def playlists_changed(self, playlists: Sequence[Playlist]) -> None:
        logger.debug(f"Playlists changed: {[p.name for p in playlists]}")

    def current_playlist_changed(self, playlist: Playlist | None) -> None:
        logger.debug(
            "Current playlist changed",
            playlist_id=playlist.id if playlist else None,
        )


class CompositePlaybackObserver:
    """Fans every notification out to several observers, in order."""

    def __init__(self, observers: Iterable[PlaybackObserver] = ()) -> None:
        self._observers: list[PlaybackObserver] = list(observers)

    def add(self, observer: PlaybackObserver) -> None:
        self._observers.append(observer)

    def remove(self, observer: PlaybackObserver) -> None:
        self._observers.remove(observer)

    def queue_changed(self, positions: Mapping[str, int]) -> None:
        for observer in list(self._observers):
            observer.queue_changed(positions)

    def last_played_changed(self, track: Track | None) -> None:
        for observer in list(self._observers):
            observer.last_played_changed(track)

    def mode_changed(self, mode: PlaybackMode) -> None:
        for observer in list(self._observers):
            observer.mode_changed(mode)

    def playlists_changed(self, playlists: Sequence[Playlist]) -> None:
        for observer in list(self._observers):
            observer.playlists_changed(playlists)

    def current_playlist_changed(self, playlist: Playlist | None) -> None:
        for observer in list(self._observers):
            observer.current_playlist_changed(playlist)
