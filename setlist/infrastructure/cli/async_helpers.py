"""Async helpers for CLI commands to eliminate duplication."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from setlist.application.services import PlaybackService, create_playback_service
from setlist.infrastructure.persistence.database.db_connection import dispose_engine
from setlist.infrastructure.persistence.database.db_models import init_db


@asynccontextmanager
async def playback_session(
    save: bool = False, **service_options: Any
) -> AsyncGenerator[PlaybackService]:
    """Load a playback service for one command and persist it afterwards.

    Args:
        save: Run ``save_all`` when the block exits without an error
        **service_options: Forwarded to ``create_playback_service``
    """
    try:
        await init_db()
        service = create_playback_service(**service_options)
        await service.startup()
        yield service
        if save:
            await service.shutdown()
    finally:
        await dispose_engine()
