"""Configuration module for setlist.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_config(key: str, default=None) -> Any
    Flat-key configuration access

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

resilient_operation(operation_name: str)
    Decorator for logging failures at service boundaries

Usage:
------
```python
from setlist.config import settings
seed = settings.playback.shuffle_seed

from setlist.config import get_logger
logger = get_logger(__name__)
logger.info("Loading playlists")
```
"""

from .logging import (
    get_logger,
    resilient_operation,
    setup_loguru_logger,
)
from .settings import get_config, settings

__all__ = [
    "get_config",
    "get_logger",
    "resilient_operation",
    "settings",
    "setup_loguru_logger",
]
