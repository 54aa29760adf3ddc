"""Generic key-value store over SQLAlchemy.

Collections are addressed by name; records cross the boundary as Pydantic
models. Each collection has one primary key and optional secondary indexes.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from lifeos.database.models import DailyRecordDB, FinanceEntryDB, SettingsDB, TaskDB, TaskInstanceDB

logger = logging.getLogger(__name__)

TASKS = "tasks"
TASK_INSTANCES = "task_instances"
DAILY_RECORDS = "daily_records"
FINANCE_ENTRIES = "finance_entries"
SETTINGS = "settings"


@dataclass(frozen=True)
class Collection:
    """ORM class, key attribute and index-name -> attribute map of a collection."""

    model: type
    key: str
    indexes: Dict[str, str] = field(default_factory=dict)


COLLECTIONS: Dict[str, Collection] = {
    TASKS: Collection(TaskDB, "id"),
    TASK_INSTANCES: Collection(TaskInstanceDB, "id", {"by-date": "date", "by-task-id": "task_id"}),
    DAILY_RECORDS: Collection(DailyRecordDB, "date", {"by-date": "date"}),
    FINANCE_ENTRIES: Collection(FinanceEntryDB, "id", {"by-date": "date"}),
    SETTINGS: Collection(SettingsDB, "id"),
}


class Store:
    """get / get_all / get_all_by_index / put / delete over named collections."""

    def __init__(self, db: Session):
        self.db = db

    def _collection(self, name: str) -> Collection:
        try:
            return COLLECTIONS[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    def _index_column(self, collection: Collection, index_name: str):
        attr = collection.indexes.get(index_name)
        if attr is None:
            raise ValueError(f"Unknown index {index_name!r} for {collection.model.__tablename__}")
        return getattr(collection.model, attr)

    def get(self, collection: str, key: Any) -> Optional[BaseModel]:
        """Get a record by primary key, or None."""
        spec = self._collection(collection)
        row = self.db.get(spec.model, key)
        return row.to_pydantic() if row else None

    def get_all(self, collection: str) -> List[BaseModel]:
        """Get every record of a collection ordered by key."""
        spec = self._collection(collection)
        rows = self.db.query(spec.model).order_by(getattr(spec.model, spec.key)).all()
        return [row.to_pydantic() for row in rows]

    def get_all_by_index(self, collection: str, index_name: str, value: Any) -> List[BaseModel]:
        """Get records whose indexed attribute equals value."""
        spec = self._collection(collection)
        column = self._index_column(spec, index_name)
        rows = (
            self.db.query(spec.model)
            .filter(column == value)
            .order_by(getattr(spec.model, spec.key))
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def get_range_by_index(self, collection: str, index_name: str, low: Any, high: Any) -> List[BaseModel]:
        """Get records whose indexed attribute is within [low, high]."""
        spec = self._collection(collection)
        column = self._index_column(spec, index_name)
        rows = (
            self.db.query(spec.model)
            .filter(column >= low, column <= high)
            .order_by(column, getattr(spec.model, spec.key))
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def put(self, collection: str, record: BaseModel) -> Any:
        """Insert or replace a record. Returns its key."""
        spec = self._collection(collection)
        row = spec.model.from_pydantic(record)
        key = getattr(row, spec.key)
        try:
            self.db.merge(row)
            self.db.commit()
            logger.debug(f"Put {collection}/{key}")
            return key
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to put {collection}/{key}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, collection: str, key: Any) -> bool:
        """Delete a record by key. Returns False when it did not exist."""
        spec = self._collection(collection)
        row = self.db.get(spec.model, key)
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
            logger.debug(f"Deleted {collection}/{key}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete {collection}/{key}: {type(e).__name__}: {str(e)}")
            raise

    def delete_by_index(self, collection: str, index_name: str, value: Any) -> int:
        """Delete every record whose indexed attribute equals value."""
        spec = self._collection(collection)
        column = self._index_column(spec, index_name)
        try:
            affected = self.db.query(spec.model).filter(column == value).delete(synchronize_session="fetch")
            self.db.commit()
            logger.debug(f"Deleted {affected} {collection} rows where {index_name}={value}")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete {collection} by {index_name}: {type(e).__name__}: {str(e)}")
            raise

    def clear(self, collection: str) -> int:
        """Delete every record of a collection."""
        spec = self._collection(collection)
        try:
            affected = self.db.query(spec.model).delete(synchronize_session="fetch")
            self.db.commit()
            logger.debug(f"Cleared {affected} rows from {collection}")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to clear {collection}: {type(e).__name__}: {str(e)}")
            raise
