"""Repository decorator for standardizing DB operations.

Wrapped repository coroutines get:
- Structured logging with context and timing information
- Error classification by SQLAlchemy exception type
- Conversion of storage failures into ``PersistenceError``

Domain exceptions raised by the repository itself pass through unchanged.
"""

from collections.abc import Callable, Coroutine
import functools
import inspect
import time
from typing import Any, ParamSpec, TypeVar

from sqlalchemy.exc import (
    DatabaseError,
    IntegrityError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from setlist.config import get_logger
from setlist.domain.exceptions import PersistenceError

# Initialize logger
logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def db_operation(operation_name: str | None = None):
    """Decorate repository methods with consistent logging and error handling.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Example:
        @db_operation("get_playlist")
        async def get_playlist_by_id(self, playlist_id: int) -> Playlist:
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        func_name = operation_name or func.__name__

        if not inspect.iscoroutinefunction(func):
            raise TypeError(
                f"db_operation can only be used with async functions, but {func_name} is not async",
            )

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            repo_name = args[0].__class__.__name__ if args else "Repository"
            context = _build_log_context(kwargs)

            def elapsed_ms() -> float:
                return (time.perf_counter() - start_time) * 1000

            logger.trace(
                f"DB operation starting: {repo_name}.{func_name}",
                operation=func_name,
                **context,
            )
            try:
                result = await func(*args, **kwargs)
            except (NoResultFound, MultipleResultsFound) as e:
                logger.debug(
                    f"DB lookup failed: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise PersistenceError(func_name, str(e)) from e
            except IntegrityError as e:
                logger.warning(
                    f"DB integrity error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise PersistenceError(func_name, str(e)) from e
            except PoolTimeoutError as e:
                logger.error(
                    f"DB timeout error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise PersistenceError(func_name, str(e)) from e
            except OperationalError as e:
                logger.error(
                    f"DB operational error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise PersistenceError(func_name, str(e)) from e
            except DatabaseError as e:
                logger.error(
                    f"DB error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise PersistenceError(func_name, str(e)) from e
            except SQLAlchemyError as e:
                logger.error(
                    f"SQLAlchemy error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise PersistenceError(func_name, str(e)) from e

            logger.trace(
                f"DB operation completed: {repo_name}.{func_name}",
                operation=func_name,
                exec_time_ms=elapsed_ms(),
                **context,
            )
            return result

        return wrapper

    return decorator


def _build_log_context(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Build a context dictionary for logging from function kwargs."""
    return {
        k: v
        for k, v in kwargs.items()
        if not k.startswith("_") and isinstance(v, int | str | bool)
    }
