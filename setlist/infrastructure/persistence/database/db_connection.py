"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and configuration
- Session management
- Unit of work creation for the application layer
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from setlist.config import get_logger, settings
from setlist.infrastructure.persistence.unit_of_work import DatabaseUnitOfWork

# Create module logger
logger = get_logger(__name__)


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create async SQLAlchemy engine, tuned for a local SQLite file."""
    db_url = connection_string or settings.database.url
    url = make_url(db_url)
    is_sqlite = url.get_backend_name() == "sqlite"

    engine_kwargs = {}
    if is_sqlite:
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": 30.0,
        }
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            # Small pool avoids concurrent writes to SQLite
            engine_kwargs |= {"pool_size": 1, "max_overflow": 2, "pool_timeout": 60}

    engine = create_async_engine(
        db_url,
        pool_pre_ping=True,
        echo=settings.database.echo,
        **engine_kwargs,
    )

    if is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _):  # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA busy_timeout = 30000")
            cursor.execute("PRAGMA journal_mode = WAL")
            cursor.execute("PRAGMA synchronous = NORMAL")
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    logger.info(f"Created database engine for {url.render_as_string(hide_password=True)}")
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None
# Global session factory singleton
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def create_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,  # Domain objects outlive the session
        autoflush=True,
    )


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the global session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the global engine.

    aiosqlite connections are bound to the event loop that opened them, so
    callers that run one loop per command dispose before the loop closes.
    """
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def database_unit_of_work(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[DatabaseUnitOfWork]:
    """Open a session and yield a unit of work bound to it.

    The transaction commits when the block exits normally and rolls back
    when it raises.
    """
    factory = session_factory or get_session_factory()
    async with factory() as session, DatabaseUnitOfWork(session) as uow:
        yield uow
