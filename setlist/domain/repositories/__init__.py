"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
"""

from .interfaces import (
    PlaylistRepositoryProtocol,
    StateRepositoryProtocol,
    TrackRepositoryProtocol,
    UnitOfWorkProtocol,
)

__all__ = [
    "PlaylistRepositoryProtocol",
    "StateRepositoryProtocol",
    "TrackRepositoryProtocol",
    "UnitOfWorkProtocol",
]
