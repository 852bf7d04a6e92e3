"""Core track repository implementation."""

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from setlist.config import get_logger
from setlist.domain.entities import Track
from setlist.infrastructure.persistence.database.db_models import DBTrack
from setlist.infrastructure.persistence.repositories.base_repo import BaseRepository
from setlist.infrastructure.persistence.repositories.repo_decorator import db_operation
from setlist.infrastructure.persistence.repositories.track.mapper import TrackMapper

# Create module logger
logger = get_logger(__name__)


class TrackRepository(BaseRepository[DBTrack, Track]):
    """Track rows and their playlist membership.

    A NULL ``playlist_id`` marks a track that belongs to no playlist.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session and mapper."""
        super().__init__(
            session=session,
            model_class=DBTrack,
            mapper=TrackMapper(),
        )

    @db_operation("sync_playlist_tracks")
    async def sync_playlist_tracks(self, playlist_id: int, tracks: list[Track]) -> None:
        """Make the stored membership and order of a playlist match ``tracks``.

        Tracks are upserted by uid, so a track that moved here from another
        playlist is reassigned rather than duplicated. Rows of this playlist
        that are no longer listed become unassigned.
        """
        uids = [track.id for track in tracks]

        detach = update(DBTrack).where(DBTrack.playlist_id == playlist_id)
        if uids:
            detach = detach.where(DBTrack.uid.not_in(uids))
        result = await self.session.execute(
            detach.values(playlist_id=None).execution_options(synchronize_session=False)
        )
        if result.rowcount:
            logger.debug(
                f"Detached {result.rowcount} tracks from playlist {playlist_id}"
            )

        await self.bulk_upsert(
            [
                TrackMapper.to_row(track, playlist_id=playlist_id, position=position)
                for position, track in enumerate(tracks)
            ],
            lookup_keys=["uid"],
        )

    @db_operation("detach_playlist")
    async def detach_playlist(self, playlist_id: int) -> int:
        """Mark every track of a playlist as unassigned."""
        result = await self.session.execute(
            update(DBTrack)
            .where(DBTrack.playlist_id == playlist_id)
            .values(playlist_id=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    @db_operation("find_orphans")
    async def find_orphans(self) -> list[Track]:
        """Tracks that belong to no playlist."""
        stmt = self.select().where(DBTrack.playlist_id.is_(None)).order_by(DBTrack.id)
        return self.mapper.map_collection(await self._execute_query(stmt))

    @db_operation("delete_orphans")
    async def delete_orphans(self) -> int:
        """Delete tracks that belong to no playlist; returns the count."""
        result = await self.session.execute(
            delete(DBTrack)
            .where(DBTrack.playlist_id.is_(None))
            .execution_options(synchronize_session=False)
        )
        removed = result.rowcount or 0
        if removed:
            logger.info(f"Deleted {removed} orphaned tracks")
        return removed

    async def count(self) -> int:
        """Number of stored track rows, assigned or not."""
        return await self.count_entities()
