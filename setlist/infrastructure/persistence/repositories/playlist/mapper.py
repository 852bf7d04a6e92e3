"""Playlist mapper for domain-persistence conversions."""

from attrs import define

from setlist.domain.entities import Playlist
from setlist.infrastructure.persistence.database.db_models import DBPlaylist
from setlist.infrastructure.persistence.repositories.base_repo import BaseModelMapper
from setlist.infrastructure.persistence.repositories.track.mapper import TrackMapper


@define(frozen=True, slots=True)
class PlaylistMapper(BaseModelMapper[DBPlaylist, Playlist]):
    """Bidirectional mapper between domain and persistence models."""

    @staticmethod
    def to_domain(db_model: DBPlaylist) -> Playlist:
        """Convert persistence model to domain entity.

        ``db_model.tracks`` must already be loaded; the relationship is
        ordered by track position.
        """
        return Playlist(
            id=db_model.id,
            name=db_model.name,
            position=db_model.position,
            tracks=TrackMapper.map_collection(
                sorted(db_model.tracks, key=lambda t: t.position)
            ),
        )

    @staticmethod
    def to_db(domain_model: Playlist) -> DBPlaylist:
        """Convert domain entity to persistence model, without tracks."""
        return DBPlaylist(
            name=domain_model.name,
            position=domain_model.position,
            track_count=domain_model.track_count,
        )
