"""Playback sequencing primitives: modes, order policy and the manual queue."""

from .order import PlaybackMode, RandomSource, resolve_next, resolve_prev
from .queue import NOT_QUEUED, PlaybackQueue

__all__ = [
    "NOT_QUEUED",
    "PlaybackMode",
    "PlaybackQueue",
    "RandomSource",
    "resolve_next",
    "resolve_prev",
]
