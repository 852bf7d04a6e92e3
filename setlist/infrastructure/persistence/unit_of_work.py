"""Database Unit of Work implementation for transaction boundary management.

This module provides the concrete implementation of the UnitOfWork pattern,
handling transaction management and repository creation using a shared database session.
"""

from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from setlist.domain.repositories.interfaces import (
    PlaylistRepositoryProtocol,
    StateRepositoryProtocol,
    TrackRepositoryProtocol,
)
from setlist.infrastructure.persistence.repositories.playlist.core import PlaylistRepository
from setlist.infrastructure.persistence.repositories.state import StateRepository
from setlist.infrastructure.persistence.repositories.track.core import TrackRepository


class DatabaseUnitOfWork:
    """Database implementation of the Unit of Work pattern.

    All repositories handed out share one session and therefore one
    transaction. The unit of work commits on successful exit and rolls back
    when the block raises; ``commit``/``rollback`` may also be called
    explicitly.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._committed = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager with automatic commit/rollback."""
        if exc_type is not None:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self._session.rollback()

    def get_playlist_repository(self) -> PlaylistRepositoryProtocol:
        """Get playlist repository using this unit of work's transaction."""
        return PlaylistRepository(self._session)

    def get_track_repository(self) -> TrackRepositoryProtocol:
        """Get track repository using this unit of work's transaction."""
        return TrackRepository(self._session)

    def get_state_repository(self) -> StateRepositoryProtocol:
        """Get state repository using this unit of work's transaction."""
        return StateRepository(self._session)
