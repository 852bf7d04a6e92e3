"""Key/value repository for persisted application state."""

from typing import Any

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from setlist.infrastructure.persistence.database.db_models import DBAppState
from setlist.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
)
from setlist.infrastructure.persistence.repositories.repo_decorator import db_operation


@define(frozen=True, slots=True)
class StateMapper(BaseModelMapper[DBAppState, tuple[str, Any]]):
    """Maps a state row to its ``(key, value)`` pair."""

    @staticmethod
    def to_domain(db_model: DBAppState) -> tuple[str, Any]:
        return db_model.key, db_model.value

    @staticmethod
    def to_db(domain_model: tuple[str, Any]) -> DBAppState:
        key, value = domain_model
        return DBAppState(key=key, value=value)


class StateRepository(BaseRepository[DBAppState, tuple[str, Any]]):
    """JSON values stored under string keys."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBAppState, mapper=StateMapper())

    @db_operation("get_state_value")
    async def get_value(self, key: str, default: Any = None) -> Any:
        """Read a value, or ``default`` when unset."""
        row = await self._execute_query_one(self.select().where(DBAppState.key == key))
        if row is None or row.value is None:
            return default
        return row.value

    @db_operation("set_state_value")
    async def set_value(self, key: str, value: Any) -> None:
        """Write a JSON-serializable value."""
        await self.bulk_upsert([{"key": key, "value": value}], lookup_keys=["key"])

    @db_operation("get_all_state")
    async def get_all(self) -> dict[str, Any]:
        rows = await self._execute_query(self.select().order_by(DBAppState.key))
        return dict(self.mapper.map_collection(rows))
