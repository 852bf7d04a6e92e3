"""Track mapper for domain-persistence conversions."""

from typing import Any

from attrs import define

from setlist.domain.entities import Track
from setlist.infrastructure.persistence.database.db_models import DBTrack
from setlist.infrastructure.persistence.repositories.base_repo import BaseModelMapper


@define(frozen=True, slots=True)
class TrackMapper(BaseModelMapper[DBTrack, Track]):
    """Bidirectional mapper between domain and persistence models."""

    @staticmethod
    def to_domain(db_model: DBTrack) -> Track:
        """Convert persistence model to domain entity."""
        return Track(
            id=db_model.uid,
            location=db_model.location,
            title=db_model.title,
            artist=db_model.artist,
            album=db_model.album,
            duration_ms=db_model.duration_ms,
        )

    @staticmethod
    def to_db(domain_model: Track) -> DBTrack:
        """Convert domain entity to an unassigned persistence model."""
        return DBTrack(**TrackMapper.to_row(domain_model))

    @staticmethod
    def to_row(
        track: Track, playlist_id: int | None = None, position: int = 0
    ) -> dict[str, Any]:
        """Column values for bulk writes."""
        return {
            "uid": track.id,
            "playlist_id": playlist_id,
            "position": position,
            "location": track.location,
            "title": track.title,
            "artist": track.artist,
            "album": track.album,
            "duration_ms": track.duration_ms,
        }
