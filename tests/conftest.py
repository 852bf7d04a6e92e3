import functools

import pytest

from setlist.infrastructure.persistence.database.db_connection import (
    create_db_engine,
    create_session_factory,
    database_unit_of_work,
)
from setlist.infrastructure.persistence.database.db_models import init_db
from tests.fixtures.models import (  # noqa: F401
    observer,
    playlist,
    seeded_rng,
    store,
    track,
    tracks,
    uow_factory,
)


@pytest.fixture
def db_url(tmp_path):
    """SQLite file in the test's temporary directory."""
    return f"sqlite+aiosqlite:///{tmp_path / 'setlist-test.db'}"


@pytest.fixture
async def db_engine(db_url):
    """Engine with the schema created."""
    engine = create_db_engine(db_url)
    try:
        await init_db(engine)
    except Exception as e:
        pytest.fail(f"Database initialization failed: {e}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory):
    """Provide database session with automatic rollback."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def db_uow_factory(session_factory):
    """Unit of work factory bound to the test database."""
    return functools.partial(database_unit_of_work, session_factory)


@pytest.fixture
async def playlist_repo(db_session):
    from setlist.infrastructure.persistence.repositories import PlaylistRepository

    return PlaylistRepository(db_session)


@pytest.fixture
async def track_repo(db_session):
    from setlist.infrastructure.persistence.repositories import TrackRepository

    return TrackRepository(db_session)


@pytest.fixture
async def state_repo(db_session):
    from setlist.infrastructure.persistence.repositories import StateRepository

    return StateRepository(db_session)
