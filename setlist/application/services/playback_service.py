"""Single controller for playlists, the manual queue and playback order.

``PlaybackService`` wires the manager, the visible-ordering view and the
sequencer around one shared ``PlaybackQueue``. It is owned by the asyncio
event loop thread; other threads reach it only through
``PlayerEventBridge``.
"""

from collections.abc import Iterable
import random

from setlist.config import get_logger, resilient_operation, settings
from setlist.domain.entities import Playlist, Track
from setlist.domain.playback import PlaybackMode, PlaybackQueue, RandomSource

from .observers import PlaybackObserver
from .playlist_manager import PlaylistManager, UnitOfWorkFactory
from .playlist_view import PlaylistView
from .sequencer import PlaybackSequencer

logger = get_logger(__name__)


class PlaybackService:
    """Facade the player and the UI talk to."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        observer: PlaybackObserver | None = None,
        rng: RandomSource | None = None,
        mode: PlaybackMode | str = PlaybackMode.DEFAULT,
        default_playlist_name: str = "Default",
    ) -> None:
        self._queue = PlaybackQueue()
        self._manager = PlaylistManager(
            uow_factory,
            queue=self._queue,
            observer=observer,
            default_name=default_playlist_name,
        )
        self._view = PlaylistView(self._manager)
        self._sequencer = PlaybackSequencer(
            self._view,
            queue=self._queue,
            rng=rng,
            observer=observer,
            mode=PlaybackMode.parse(mode),
        )

    @property
    def manager(self) -> PlaylistManager:
        return self._manager

    @property
    def sequencer(self) -> PlaybackSequencer:
        return self._sequencer

    @property
    def view(self) -> PlaylistView:
        return self._view

    @property
    def queue(self) -> PlaybackQueue:
        return self._queue

    @resilient_operation("playback_startup")
    async def startup(self) -> list[Playlist]:
        """Load persisted playlists and restore the current selection."""
        return await self._manager.load()

    @resilient_operation("playback_shutdown")
    async def shutdown(self) -> None:
        """Persist everything before the process exits."""
        await self._manager.save_all()

    def next_track(self, current: Track | None) -> Track | None:
        track = self._sequencer.next(current)
        if track is None:
            logger.debug("No next track")
        return track

    def previous_track(self, current: Track | None) -> Track | None:
        return self._sequencer.prev(current)

    def track_opened(self, track: Track | None) -> None:
        self._sequencer.set_last_played(track)

    def select_playlist(self, playlist: Playlist) -> None:
        """Make ``playlist`` current and drop the filter and sort of the old one."""
        self._manager.select(playlist)
        self._view.reset()

    def enqueue(self, tracks: Track | Iterable[Track]) -> int:
        if isinstance(tracks, Track):
            return int(self._sequencer.enqueue(tracks))
        return self._sequencer.enqueue_all(tracks)

    def clear_queue(self) -> list[Track]:
        return self._sequencer.clear_queue()

    def set_mode(self, mode: PlaybackMode | str) -> None:
        self._sequencer.set_mode(mode)


def create_playback_service(
    observer: PlaybackObserver | None = None,
    uow_factory: UnitOfWorkFactory | None = None,
    rng: RandomSource | None = None,
    mode: PlaybackMode | str | None = None,
) -> PlaybackService:
    """Build a service from settings, backed by the configured database.

    ``rng`` and ``mode`` override the configured shuffle seed and default mode.
    """
    if uow_factory is None:
        from setlist.infrastructure.persistence.database.db_connection import (
            database_unit_of_work,
        )

        uow_factory = database_unit_of_work

    return PlaybackService(
        uow_factory,
        observer=observer,
        rng=rng if rng is not None else random.Random(settings.playback.shuffle_seed),
        mode=mode if mode is not None else settings.playback.default_mode,
        default_playlist_name=settings.playback.default_playlist_name,
    )
