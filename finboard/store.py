"""Record store interface and the in-memory implementation.

Every entity type gets its own store exposing ``list``, ``get``,
``create``, ``update`` and ``delete``. Services receive stores as
constructor arguments, so the same code runs against memory in tests and
against SQLite (:mod:`finboard.db`) in the app.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, List, Mapping, Type, TypeVar, Union

from .errors import NotFoundError
from .logging_config import get_logger
from .schema import ENTITY_NAMES, canonical_changes, coerce_record

logger = get_logger(__name__)

R = TypeVar("R")


class RecordStore(ABC, Generic[R]):
    """CRUD access to one entity type."""

    record_type: Type[R]

    @property
    def entity(self) -> str:
        return ENTITY_NAMES[self.record_type]

    @abstractmethod
    def list(self, **criteria: Any) -> List[R]:
        """Records whose fields equal every value in ``criteria``."""

    @abstractmethod
    def get(self, record_id: int) -> R:
        """Return the record or raise ``NotFoundError``."""

    @abstractmethod
    def create(self, record: Union[R, Mapping[str, Any]]) -> R:
        """Validate and store a new record; returns it with its id."""

    @abstractmethod
    def update(self, record_id: int, **changes: Any) -> R:
        """Apply a partial update and return the updated record."""

    @abstractmethod
    def delete(self, record_id: int) -> bool:
        """Remove a record; raises ``NotFoundError`` when it does not exist."""

    def merged(self, current: R, changes: Mapping[str, Any]) -> R:
        """Record that ``update`` would store, without storing it."""
        updates = canonical_changes(self.record_type, changes)
        updates.pop("id", None)
        return coerce_record(self.record_type, dataclasses.replace(current, **updates))


class InMemoryRecordStore(RecordStore[R]):
    """List-backed store; ids are assigned as ``max(id) + 1``."""

    def __init__(self, record_type: Type[R], records: Iterable[Union[R, Mapping[str, Any]]] = ()):
        self.record_type = record_type
        self._records: List[R] = []
        for record in records:
            self._insert(coerce_record(record_type, record))

    def _next_id(self) -> int:
        return max((r.id for r in self._records if r.id is not None), default=0) + 1

    def _insert(self, record: R) -> R:
        if record.id is None or any(r.id == record.id for r in self._records):
            record = dataclasses.replace(record, id=self._next_id())
        self._records.append(record)
        return record

    def _index(self, record_id: int) -> int:
        try:
            wanted = int(record_id)
        except (TypeError, ValueError):
            raise NotFoundError(self.entity, record_id) from None
        for index, record in enumerate(self._records):
            if record.id == wanted:
                return index
        raise NotFoundError(self.entity, record_id)

    def list(self, **criteria: Any) -> List[R]:
        if not criteria:
            return list(self._records)
        wanted = canonical_changes(self.record_type, criteria)
        return [
            r for r in self._records
            if all(getattr(r, name) == value for name, value in wanted.items())
        ]

    def get(self, record_id: int) -> R:
        return self._records[self._index(record_id)]

    def create(self, record: Union[R, Mapping[str, Any]]) -> R:
        created = self._insert(dataclasses.replace(coerce_record(self.record_type, record), id=None))
        logger.info("Created %s %s", self.entity.lower(), created.id)
        return created

    def update(self, record_id: int, **changes: Any) -> R:
        index = self._index(record_id)
        updated = self.merged(self._records[index], changes)
        self._records[index] = updated
        logger.info("Updated %s %s", self.entity.lower(), record_id)
        return updated

    def delete(self, record_id: int) -> bool:
        index = self._index(record_id)
        del self._records[index]
        logger.info("Deleted %s %s", self.entity.lower(), record_id)
        return True
