"""Repository layer for database operations with SQLAlchemy 2.0 best practices."""

from datetime import UTC, datetime
from typing import Any, Generic, Protocol, TypeVar

from attrs import define
from sqlalchemy import Select, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement
from toolz import partition_all

from setlist.config import get_logger
from setlist.infrastructure.persistence.database.db_models import SetlistDBBase
from setlist.infrastructure.persistence.repositories.repo_decorator import db_operation

logger = get_logger(__name__)

TDBModel = TypeVar("TDBModel", bound=SetlistDBBase)
TDomainModel = TypeVar("TDomainModel")


class ModelMapper(Protocol[TDBModel, TDomainModel]):
    """Protocol for bidirectional mapping between models."""

    @staticmethod
    def to_domain(db_model: TDBModel) -> TDomainModel:
        """Convert database model to domain model."""
        ...

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        """Convert domain model to database model."""
        ...

    @classmethod
    def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models."""
        ...


@define(frozen=True, slots=True)
class BaseModelMapper(Generic[TDBModel, TDomainModel]):
    """Base implementation of ModelMapper with common functionality.

    Usage:
        @define(frozen=True, slots=True)
        class TrackMapper(BaseModelMapper[DBTrack, Track]):
            @staticmethod
            def to_domain(db_model: DBTrack) -> Track:
                return Track(...)

            @staticmethod
            def to_db(domain_model: Track) -> DBTrack:
                return DBTrack(...)
    """

    @staticmethod
    def to_domain(db_model: TDBModel) -> TDomainModel:
        raise NotImplementedError("Subclasses must implement to_domain")

    @staticmethod
    def to_db(domain_model: TDomainModel) -> TDBModel:
        raise NotImplementedError("Subclasses must implement to_db")

    @classmethod
    def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models.

        Uses cls.to_domain to ensure the subclass implementation is called.
        """
        return [cls.to_domain(db_model) for db_model in db_models or []]


class BaseRepository(Generic[TDBModel, TDomainModel]):
    """Base repository for database operations with SQLAlchemy 2.0 best practices."""

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[TDBModel],
        mapper: ModelMapper[TDBModel, TDomainModel],
    ) -> None:
        """Initialize repository with session and model mappings."""
        self.session = session
        self.model_class = model_class
        self.mapper = mapper

    # -------------------------------------------------------------------------
    # SELECT STATEMENT BUILDERS
    # -------------------------------------------------------------------------

    def select(self, *columns: Any) -> Select[tuple[Any, ...]]:
        """Create select statement for the model, or for specific columns."""
        return select(*columns) if columns else select(self.model_class)

    def select_by_id(self, id_: int) -> Select[tuple[TDBModel]]:
        """Create select statement for a record by ID."""
        return select(self.model_class).where(self.model_class.id == id_)

    def select_count(
        self, conditions: dict[str, Any] | list[ColumnElement] | None = None
    ) -> Select:
        """Create a count statement for records matching conditions."""
        stmt = select(func.count(self.model_class.id))

        if conditions:
            match conditions:
                case dict():
                    for field, value in conditions.items():
                        stmt = stmt.where(getattr(self.model_class, field) == value)
                case list():
                    for condition in conditions:
                        stmt = stmt.where(condition)

        return stmt

    # -------------------------------------------------------------------------
    # DIRECT DATABASE OPERATIONS (non-decorated helpers)
    # -------------------------------------------------------------------------

    async def _execute_query(
        self,
        stmt: Select[tuple[TDBModel]],
    ) -> list[TDBModel]:
        """Execute a query and return all results directly."""
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _execute_query_one(
        self,
        stmt: Select[tuple[TDBModel]],
    ) -> TDBModel | None:
        """Execute a query and return the first result directly."""
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _execute_scalar(self, stmt: Select) -> Any:
        """Execute a scalar query and return the first result."""
        return await self.session.scalar(stmt)

    # -------------------------------------------------------------------------
    # DECORATED DATABASE OPERATIONS
    # -------------------------------------------------------------------------

    @db_operation("count_entities")
    async def count_entities(
        self, conditions: dict[str, Any] | list[ColumnElement] | None = None
    ) -> int:
        """Count entities matching the given conditions."""
        count = await self._execute_scalar(self.select_count(conditions))
        return count or 0

    @db_operation("bulk_upsert")
    async def bulk_upsert(
        self,
        entities: list[dict[str, Any]],
        lookup_keys: list[str],
        batch_size: int = 500,
    ) -> int:
        """Insert or update many rows in SQLite batches.

        Args:
            entities: Column values per row
            lookup_keys: Unique columns that identify an existing row
            batch_size: Rows per statement, bounded by SQLite's variable limit

        Returns:
            Number of rows written
        """
        if not entities:
            return 0

        now = datetime.now(UTC)
        rows = [{"created_at": now, "updated_at": now, **entity} for entity in entities]

        for batch in partition_all(batch_size, rows):
            stmt = sqlite_insert(self.model_class).values(list(batch))
            update_keys = set(batch[0]) - set(lookup_keys) - {"id", "created_at"}
            stmt = stmt.on_conflict_do_update(
                index_elements=[getattr(self.model_class, k) for k in lookup_keys],
                set_={key: getattr(stmt.excluded, key) for key in update_keys},
            )
            await self.session.execute(stmt)

        logger.debug(f"Upserted {len(rows)} {self.model_class.__tablename__} rows")
        return len(rows)
