"""Marshal player-thread events onto the event loop that owns playback state.

The audio player reports "track finished" and "track opened" from its own
thread. State is only ever mutated on the loop thread, so every call here is
scheduled there and answered through a ``concurrent.futures.Future`` the
player thread may block on.
"""

import asyncio
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from setlist.config import get_logger
from setlist.domain.entities import Track

from .playback_service import PlaybackService

logger = get_logger(__name__)


class PlayerEventBridge:
    """Thread-safe entry point for the playback subsystem.

    Args:
        service: Playback service owned by ``loop``
        loop: Running event loop that owns ``service``
    """

    def __init__(self, service: PlaybackService, loop: asyncio.AbstractEventLoop) -> None:
        self._service = service
        self._loop = loop

    def track_finished(self, current: Track | None) -> "Future[Track | None]":
        """The player finished ``current``; resolves to the track to play next."""
        return self._call(self._service.next_track, current)

    def track_opened(self, track: Track | None) -> "Future[None]":
        return self._call(self._service.track_opened, track)

    def request_next(self, current: Track | None) -> "Future[Track | None]":
        return self._call(self._service.next_track, current)

    def request_prev(self, current: Track | None) -> "Future[Track | None]":
        return self._call(self._service.previous_track, current)

    def request_shutdown(self) -> "Future[None]":
        """Persist everything; resolves once the save has committed."""
        self._check_thread()
        return asyncio.run_coroutine_threadsafe(self._service.shutdown(), self._loop)

    def _call(self, func: Callable[..., Any], *args: Any) -> Future:
        self._check_thread()
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(func(*args))
            except Exception as e:
                logger.exception(f"Player event {func.__name__} failed: {e}")
                future.set_exception(e)

        self._loop.call_soon_threadsafe(run)
        return future

    def _check_thread(self) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            return
        if running is self._loop:
            raise RuntimeError(
                "PlayerEventBridge must not be called from its own event loop thread"
            )
