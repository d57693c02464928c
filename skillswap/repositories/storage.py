"""
Key-value storage port and its backends.

Every backend stores opaque string blobs under string keys. A write replaces
the whole value for its key in one step.
"""
from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from sqlalchemy import select

from skillswap.core.config import Settings, get_settings
from skillswap.db.models import StorageEntry
from skillswap.db.session import create_schema, get_session

logger = logging.getLogger("skillswap.storage")

DEFAULT_FILE_MODE = 0o666


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class StorageError(Exception):
    """Base class for storage-layer failures raised by this package."""


class CorruptCollectionError(StorageError):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Stored value for {key!r} is not a valid collection: {reason}")
        self.key = key
        self.reason = reason


class StoragePort(Protocol):
    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage, handy for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStorage:
    """
    All keys live in a single JSON document on disk.

    Writes go to a temporary file in the same directory which then replaces
    the document, so readers never observe a half-written file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise CorruptCollectionError(str(self.path), "top-level document must be an object")
        return data

    def read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            # mkstemp creates 0600; keep the mode of the document being replaced
            mode = stat.S_IMODE(self.path.stat().st_mode) if self.path.exists() else DEFAULT_FILE_MODE & ~_current_umask()
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("wrote key %s to %s", key, self.path)


class SQLStorage:
    """Rows of the storage_entries table, one per key."""

    def __init__(self, *, create_tables: bool = True) -> None:
        if create_tables:
            create_schema()

    def read(self, key: str) -> Optional[str]:
        with get_session() as session:
            entry = session.get(StorageEntry, key)
            return entry.value if entry else None

    def write(self, key: str, value: str) -> None:
        with get_session() as session:
            entry = session.get(StorageEntry, key)
            if not entry:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        logger.debug("wrote key %s to SQL storage", key)

    def keys(self) -> list[str]:
        with get_session() as session:
            return list(session.execute(select(StorageEntry.key)).scalars().all())


def build_storage(settings: Settings | None = None) -> StoragePort:
    """Pick the backend named by SKILLSWAP_STORAGE."""
    settings = settings or get_settings()
    backend = settings.storage_backend
    if backend == "memory":
        return MemoryStorage()
    if backend == "sql":
        return SQLStorage()
    return JsonFileStorage(settings.data_file)
