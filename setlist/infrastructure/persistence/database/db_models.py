"""SQLAlchemy database models for setlist.

Playlists own tracks through a nullable foreign key. A track row whose
``playlist_id`` is NULL belongs to no playlist and is removed by the orphan
cleanup that runs when everything is saved.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    UniqueConstraint,
    inspect,
)
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from setlist.config import get_logger

# Create module logger
logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_label)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}

# Create metadata with naming convention
metadata = MetaData(naming_convention=convention)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SetlistDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with timestamps."""

    metadata = metadata

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )


class DBPlaylist(SetlistDBBase):
    """User playlist metadata and its position among sibling playlists."""

    __tablename__ = "playlists"

    name: Mapped[str] = mapped_column(String(255))
    position: Mapped[int] = mapped_column(default=0, index=True)
    track_count: Mapped[int] = mapped_column(default=0)

    # Relationships
    tracks: Mapped[list["DBTrack"]] = relationship(
        back_populates="playlist",
        order_by="DBTrack.position",
        passive_deletes=True,
    )


class DBTrack(SetlistDBBase):
    """Addressable audio item, ordered within its owning playlist."""

    __tablename__ = "tracks"

    uid: Mapped[str] = mapped_column(String(32))
    playlist_id: Mapped[int | None] = mapped_column(
        ForeignKey("playlists.id", ondelete="SET NULL"),
        default=None,
    )
    position: Mapped[int] = mapped_column(default=0)
    location: Mapped[str] = mapped_column(String(2048))
    title: Mapped[str | None] = mapped_column(String(255))
    artist: Mapped[str | None] = mapped_column(String(255))
    album: Mapped[str | None] = mapped_column(String(255))
    duration_ms: Mapped[int | None]

    # Relationships
    playlist: Mapped[DBPlaylist | None] = relationship(back_populates="tracks")

    __table_args__ = (
        UniqueConstraint("uid"),
        Index(None, "playlist_id", "position"),
    )


class DBAppState(SetlistDBBase):
    """Persisted application state scalars, such as the current playlist."""

    __tablename__ = "app_state"

    key: Mapped[str] = mapped_column(String(255))
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    __table_args__ = (UniqueConstraint("key"),)


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist.
    This is a safe operation that won't affect existing data.
    """
    if engine is None:
        from setlist.infrastructure.persistence.database.db_connection import (
            get_engine,
        )

        engine = get_engine()

    try:
        async with engine.connect() as conn:
            existing_tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
            if existing_tables:
                logger.info(f"Found existing tables: {existing_tables}")

        # Create tables - SQLAlchemy will skip tables that already exist
        async with engine.begin() as conn:
            await conn.run_sync(SetlistDBBase.metadata.create_all)
            logger.info("Database schema verified - all tables exist")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    else:
        logger.info("Database schema initialization complete")
