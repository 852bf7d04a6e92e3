"""Playlist set management.

The manager owns the ordered set of playlists and the notion of a current
playlist. In-memory edits are synchronous; anything that touches storage is
a coroutine that runs inside a single unit of work.

Invariants held after ``load()``:
- ``current`` is always a member of ``playlists``
- the set is never empty
- a track belongs to at most one playlist

The storage coroutines (``load``, ``save_all``, ``add``, ``remove``) hold one
lock for their whole run, so they complete one at a time even when callers
interleave on the event loop.
"""

import asyncio
from collections.abc import Callable, Iterable, Iterator
from contextlib import AbstractAsyncContextManager

from setlist.config import get_logger
from setlist.domain.entities import Playlist, Track
from setlist.domain.exceptions import PlaylistNotFoundError
from setlist.domain.playback import PlaybackQueue
from setlist.domain.repositories import UnitOfWorkProtocol

from .observers import NoOpPlaybackObserver, PlaybackObserver

logger = get_logger(__name__)

# Key of the persisted "last current playlist" scalar
CURRENT_PLAYLIST_KEY = "playlist.current_playlist_id"

UnitOfWorkFactory = Callable[[], AbstractAsyncContextManager[UnitOfWorkProtocol]]


class PlaylistManager:
    """Ordered, persistent set of playlists with a current selection.

    Args:
        uow_factory: Returns an async context manager yielding a unit of work
        queue: Manual play queue to purge when tracks leave their playlist
        observer: Receives playlist-set and selection notifications
        default_name: Name of the playlist created when none exist
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        queue: PlaybackQueue | None = None,
        observer: PlaybackObserver | None = None,
        default_name: str = "Default",
    ) -> None:
        self._uow_factory = uow_factory
        self._queue = queue if queue is not None else PlaybackQueue()
        self._observer = observer or NoOpPlaybackObserver()
        self._default_name = default_name
        self._playlists: list[Playlist] = []
        self._current: Playlist | None = None
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._playlists)

    def __iter__(self) -> Iterator[Playlist]:
        return iter(list(self._playlists))

    def __contains__(self, playlist: object) -> bool:
        return any(p is playlist for p in self._playlists)

    @property
    def playlists(self) -> list[Playlist]:
        return list(self._playlists)

    @property
    def current(self) -> Playlist | None:
        return self._current

    @property
    def queue(self) -> PlaybackQueue:
        return self._queue

    # -------------------------------------------------------------------------
    # PERSISTENCE
    # -------------------------------------------------------------------------

    async def load(self) -> list[Playlist]:
        """Load every persisted playlist and restore the current selection.

        An empty store gets exactly one default playlist, persisted right away.
        """
        async with self._lock:
            async with self._uow_factory() as uow:
                playlist_repo = uow.get_playlist_repository()
                playlists = await playlist_repo.list_playlists()
                current_id = await uow.get_state_repository().get_value(
                    CURRENT_PLAYLIST_KEY
                )

                if not playlists:
                    logger.info(
                        f"No playlists stored, creating '{self._default_name}'"
                    )
                    default = Playlist(name=self._default_name)
                    default.id = await playlist_repo.save_playlist(default)
                    playlists = [default]

            self._playlists = sorted(playlists, key=lambda p: p.position)
            if self._queue.clear():
                self._observer.queue_changed(self._queue.positions())

            current = self.find_by_id(current_id)
            if current is None:
                logger.debug(
                    f"Current playlist id {current_id!r} not found, using first"
                )
                current = self._playlists[0]
            self._current = current

            logger.info(
                f"Loaded {len(self._playlists)} playlists",
                current=current.name,
                tracks=sum(p.track_count for p in self._playlists),
            )
            self._observer.playlists_changed(self.playlists)
            self._observer.current_playlist_changed(current)
            return self.playlists

    async def save_all(self) -> None:
        """Persist order, contents and the current selection; drop orphan tracks.

        Positions and the current id are taken from the set as it stands when
        the save starts.
        """
        async with self._lock:
            snapshot = list(self._playlists)
            current = self._current
            for position, playlist in enumerate(snapshot):
                playlist.position = position

            async with self._uow_factory() as uow:
                playlist_repo = uow.get_playlist_repository()
                for playlist in snapshot:
                    playlist.id = await playlist_repo.save_playlist(playlist)

                removed = await uow.get_track_repository().delete_orphans()
                await uow.get_state_repository().set_value(
                    CURRENT_PLAYLIST_KEY,
                    current.id if current is not None else None,
                )

            logger.info(f"Saved {len(snapshot)} playlists", orphans_removed=removed)

    async def add(self, name: str) -> Playlist:
        """Create and persist a playlist, then append it to the set."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Playlist name must be a non-empty string")

        async with self._lock:
            playlist = Playlist(name=name, position=len(self._playlists))
            async with self._uow_factory() as uow:
                playlist.id = await uow.get_playlist_repository().save_playlist(
                    playlist
                )

            self._playlists.append(playlist)
            logger.info(f"Added playlist '{name}'", playlist_id=playlist.id)
            self._observer.playlists_changed(self.playlists)
            return playlist

    async def remove(self, playlist: Playlist) -> None:
        """Delete a playlist and release its tracks.

        When the current playlist is removed the playlist that takes its
        index becomes current, or the new last one. Removing the only
        playlist replaces it with a fresh default playlist.
        """
        async with self._lock:
            self._require(playlist)
            replacement = None
            if len(self._playlists) == 1:
                replacement = Playlist(name=self._default_name)

            async with self._uow_factory() as uow:
                playlist_repo = uow.get_playlist_repository()
                if playlist.id is not None:
                    await playlist_repo.delete_playlist(playlist.id)
                if replacement is not None:
                    replacement.id = await playlist_repo.save_playlist(replacement)

            # synchronous edits may have moved it while storage was busy
            index = self._require(playlist)
            self._purge_queue(playlist.clear())
            del self._playlists[index]
            if replacement is not None:
                self._playlists.append(replacement)
            logger.info(
                f"Removed playlist '{playlist.name}'", playlist_id=playlist.id
            )
            self._observer.playlists_changed(self.playlists)

            if self._current is playlist:
                self._set_current(
                    self._playlists[min(index, len(self._playlists) - 1)]
                )

    # -------------------------------------------------------------------------
    # SELECTION AND LOOKUP
    # -------------------------------------------------------------------------

    def select(self, playlist: Playlist) -> None:
        self._require(playlist)
        self._set_current(playlist)

    def get(self, index: int) -> Playlist:
        return self._playlists[index]

    def index_of(self, playlist: Playlist | None) -> int:
        for index, candidate in enumerate(self._playlists):
            if candidate is playlist:
                return index
        return -1

    def find_by_id(self, playlist_id: int | None) -> Playlist | None:
        if playlist_id is None:
            return None
        return next((p for p in self._playlists if p.id == playlist_id), None)

    def find_by_name(self, name: str) -> Playlist | None:
        return next((p for p in self._playlists if p.name == name), None)

    def playlist_of(self, track: Track) -> Playlist | None:
        """The playlist that owns ``track``, if any."""
        return next((p for p in self._playlists if p.contains(track)), None)

    # -------------------------------------------------------------------------
    # IN-MEMORY EDITS
    # -------------------------------------------------------------------------

    def move(self, from_index: int, to_index: int) -> None:
        """Drag the playlist at ``from_index`` so it lands at ``to_index``.

        Moving index 0 to 2 in [A, B, C, D] gives [B, C, A, D].
        """
        size = len(self._playlists)
        for value in (from_index, to_index):
            if not 0 <= value < size:
                raise IndexError(f"Playlist index {value} out of range (0..{size - 1})")
        if from_index == to_index:
            return

        playlist = self._playlists[from_index]
        if from_index > to_index:
            from_index += 1
        else:
            to_index += 1
        self._playlists.insert(to_index, playlist)
        del self._playlists[from_index]
        self._observer.playlists_changed(self.playlists)

    def rename(self, playlist: Playlist, name: str) -> None:
        self._require(playlist)
        playlist.rename(name)
        self._observer.playlists_changed(self.playlists)

    def add_tracks(
        self, playlist: Playlist, tracks: Iterable[Track], at: int | None = None
    ) -> list[Track]:
        """Add tracks to ``playlist``, taking them away from any other owner."""
        self._require(playlist)
        tracks = list(tracks)
        for other in self._playlists:
            if other is not playlist:
                other.remove_tracks(tracks)
        return playlist.add_tracks(tracks, at=at)

    def remove_tracks(self, playlist: Playlist, tracks: Iterable[Track]) -> list[Track]:
        self._require(playlist)
        removed = playlist.remove_tracks(tracks)
        self._purge_queue(removed)
        return removed

    def clear_playlist(self, playlist: Playlist) -> list[Track]:
        self._require(playlist)
        removed = playlist.clear()
        self._purge_queue(removed)
        return removed

    def _require(self, playlist: Playlist) -> int:
        index = self.index_of(playlist)
        if index == -1:
            raise PlaylistNotFoundError(playlist)
        return index

    def _set_current(self, playlist: Playlist) -> None:
        if playlist is self._current:
            return
        self._current = playlist
        logger.debug(f"Current playlist is now '{playlist.name}'")
        self._observer.current_playlist_changed(playlist)

    def _purge_queue(self, tracks: list[Track]) -> None:
        if tracks and self._queue.discard_all(tracks):
            self._observer.queue_changed(self._queue.positions())
