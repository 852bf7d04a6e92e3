"""Core playlist repository implementation."""

from sqlalchemy import Select, delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from setlist.config import get_logger
from setlist.domain.entities import Playlist
from setlist.domain.exceptions import PlaylistNotFoundError
from setlist.infrastructure.persistence.database.db_models import DBPlaylist
from setlist.infrastructure.persistence.repositories.base_repo import BaseRepository
from setlist.infrastructure.persistence.repositories.playlist.mapper import PlaylistMapper
from setlist.infrastructure.persistence.repositories.repo_decorator import db_operation
from setlist.infrastructure.persistence.repositories.track.core import TrackRepository

# Create module logger
logger = get_logger(__name__)


class PlaylistRepository(BaseRepository[DBPlaylist, Playlist]):
    """Repository for playlist operations with SQLAlchemy 2.0 best practices."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session and mapper."""
        super().__init__(
            session=session,
            model_class=DBPlaylist,
            mapper=PlaylistMapper(),
        )
        self.track_repo = TrackRepository(session)

    def with_tracks(self, stmt: Select[tuple[DBPlaylist]]) -> Select[tuple[DBPlaylist]]:
        """Eager-load member tracks so mapping never lazy-loads."""
        return stmt.options(selectinload(DBPlaylist.tracks))

    @db_operation("list_playlists")
    async def list_playlists(self) -> list[Playlist]:
        """Load every playlist ordered by position, tracks included."""
        stmt = self.with_tracks(self.select()).order_by(
            DBPlaylist.position, DBPlaylist.id
        )
        return self.mapper.map_collection(await self._execute_query(stmt))

    @db_operation("get_playlist_by_id")
    async def get_playlist_by_id(self, playlist_id: int) -> Playlist:
        """Get playlist by ID; raises PlaylistNotFoundError."""
        db_playlist = await self._execute_query_one(
            self.with_tracks(self.select_by_id(playlist_id))
        )
        if db_playlist is None:
            raise PlaylistNotFoundError(playlist_id)
        return self.mapper.to_domain(db_playlist)

    @db_operation("save_playlist")
    async def save_playlist(self, playlist: Playlist) -> int:
        """Insert or update a playlist and its track membership.

        Returns:
            The persisted playlist ID
        """
        if playlist.id is None:
            db_playlist = self.mapper.to_db(playlist)
            self.session.add(db_playlist)
            await self.session.flush()
            playlist_id = db_playlist.id
            logger.debug(f"Created playlist '{playlist.name}'", playlist_id=playlist_id)
        else:
            playlist_id = playlist.id
            result = await self.session.execute(
                update(DBPlaylist)
                .where(DBPlaylist.id == playlist_id)
                .values(
                    name=playlist.name,
                    position=playlist.position,
                    track_count=playlist.track_count,
                )
                .execution_options(synchronize_session=False)
            )
            if not result.rowcount:
                raise PlaylistNotFoundError(playlist_id)

        await self.track_repo.sync_playlist_tracks(playlist_id, list(playlist.tracks))
        return playlist_id

    @db_operation("delete_playlist")
    async def delete_playlist(self, playlist_id: int) -> None:
        """Delete a playlist, leaving its tracks unassigned."""
        detached = await self.track_repo.detach_playlist(playlist_id)
        result = await self.session.execute(
            delete(DBPlaylist)
            .where(DBPlaylist.id == playlist_id)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            logger.debug(f"Playlist {playlist_id} was not stored, nothing deleted")
        else:
            logger.debug(
                f"Deleted playlist {playlist_id}", detached_tracks=detached
            )
