"""Core domain entities representing playlist concepts."""

from .playlist import Playlist
from .track import Track, TrackList

__all__ = [
    "Playlist",
    "Track",
    "TrackList",
]
