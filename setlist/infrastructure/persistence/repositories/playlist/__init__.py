"""Playlist repositories package."""

from setlist.infrastructure.persistence.repositories.playlist.core import PlaylistRepository
from setlist.infrastructure.persistence.repositories.playlist.mapper import (
    PlaylistMapper,
)

__all__ = [
    "PlaylistMapper",
    "PlaylistRepository",
]
