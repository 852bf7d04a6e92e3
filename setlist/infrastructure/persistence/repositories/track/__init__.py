"""Track repositories package."""

from setlist.infrastructure.persistence.repositories.track.core import TrackRepository
from setlist.infrastructure.persistence.repositories.track.mapper import TrackMapper

__all__ = [
    "TrackMapper",
    "TrackRepository",
]
