"""
Typed collections over a single storage key.

A collection is a flat list of records serialized as one JSON array. Every
mutation reads the whole list, changes it in memory and writes the whole list
back; there is no partial write path.
"""
from __future__ import annotations

import json
import logging
from dataclasses import fields, replace
from datetime import datetime
from typing import Callable, Generic, Iterable, Optional, Type, TypeVar

from skillswap.core.utils import later_than, new_id, utcnow

from .storage import CorruptCollectionError, StoragePort

logger = logging.getLogger("skillswap.collections")

R = TypeVar("R")


def dump_records(records: Iterable) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def load_records(record_type: Type[R], raw: str | None, *, key: str = "") -> list[R]:
    """Decode a stored blob; a missing blob is an empty collection."""
    if raw is None:
        return []
    try:
        items = json.loads(raw)
    except ValueError as exc:
        raise CorruptCollectionError(key, f"invalid JSON ({exc})") from exc
    if not isinstance(items, list):
        raise CorruptCollectionError(key, "expected a JSON array")
    try:
        return [record_type.from_dict(item) for item in items]
    except (KeyError, TypeError, ValueError) as exc:
        raise CorruptCollectionError(key, f"bad record ({exc!r})") from exc


class Collection(Generic[R]):
    """CRUD helpers for one record type stored under one key."""

    def __init__(
        self,
        storage: StoragePort,
        key: str,
        record_type: Type[R],
        *,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = utcnow,
        initial: Callable[[], list[R]] | None = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self.record_type = record_type
        self._id_factory = id_factory
        self._clock = clock
        self._initial = initial or list
        self._has_updated_at = any(f.name == "updated_at" for f in fields(record_type))

    # -------------------------- reads --------------------------
    def get_all(self) -> list[R]:
        return load_records(self.record_type, self.storage.read(self.key), key=self.key)

    def get_by_id(self, record_id: str) -> Optional[R]:
        for record in self.get_all():
            if record.id == record_id:
                return record
        return None

    def find(self, predicate: Callable[[R], bool]) -> list[R]:
        return [r for r in self.get_all() if predicate(r)]

    def count(self) -> int:
        return len(self.get_all())

    # -------------------------- writes --------------------------
    def initialize(self) -> bool:
        """Write the initial value when the key is missing. Returns True when something was written."""
        if self.storage.read(self.key) is not None:
            return False
        self._save(self._initial())
        logger.info("initialized collection %s", self.key)
        return True

    def create(self, now: datetime | None = None, **values) -> R:
        """Append a new record stamped with a fresh id and `now` (the clock by default)."""
        records = self.get_all()
        taken = {r.id for r in records}
        record_id = self._id_factory()
        while record_id in taken:
            logger.warning("id collision in %s for %s, drawing a new one", self.key, record_id)
            record_id = self._id_factory()
        now = now or self._clock()
        stamps = {"id": record_id, "created_at": now}
        if self._has_updated_at:
            stamps["updated_at"] = now
        record = self.record_type(**values, **stamps)
        records.append(record)
        self._save(records)
        return record

    def update(self, record_id: str, command) -> Optional[R]:
        """Apply an update command to one record. Missing ids return None without writing."""
        records = self.get_all()
        for index, current in enumerate(records):
            if current.id != record_id:
                continue
            updated = command.apply(current)
            if self._has_updated_at:
                updated = replace(updated, updated_at=later_than(current.updated_at, self._clock()))
            records[index] = updated
            self._save(records)
            return updated
        return None

    def _save(self, records: list[R]) -> None:
        self.storage.write(self.key, dump_records(records))
        logger.debug("saved %d records to %s", len(records), self.key)

