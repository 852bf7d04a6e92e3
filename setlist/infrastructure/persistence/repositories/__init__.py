"""Repository layer for database operations with SQLAlchemy 2.0."""

# Re-export core components
from setlist.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
    ModelMapper,
)
from setlist.infrastructure.persistence.repositories.playlist import (
    PlaylistMapper,
    PlaylistRepository,
)
from setlist.infrastructure.persistence.repositories.repo_decorator import db_operation
from setlist.infrastructure.persistence.repositories.state import StateRepository
from setlist.infrastructure.persistence.repositories.track import (
    TrackMapper,
    TrackRepository,
)

# Define public API
__all__ = [
    "BaseModelMapper",
    "BaseRepository",
    "ModelMapper",
    "PlaylistMapper",
    "PlaylistRepository",
    "StateRepository",
    "TrackMapper",
    "TrackRepository",
    "db_operation",
]
