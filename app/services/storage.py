import logging
import os
from typing import Callable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.storage import StorageItem
from db import SessionLocal

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = {"database", "memory"}


class StorageError(RuntimeError):
    pass


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value


class SqlKeyValueStore:
    """Key-value storage backed by the ``storage_items`` table.

    Every call opens and closes its own session so the store can be shared
    across request threads.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        try:
            with self._session_factory() as db:
                item = db.get(StorageItem, key)
                return item.value if item else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Unable to read '{key}' from storage.") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as db:
                item = db.get(StorageItem, key)
                if not item:
                    db.add(StorageItem(key=key, value=value))
                else:
                    item.value = value
                db.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Unable to write '{key}' to storage.") from exc


def _storage_backend() -> str:
    return os.getenv("HOLIDAY_STORAGE", "database").strip().lower() or "database"


def build_key_value_store() -> KeyValueStore:
    backend = _storage_backend()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"Unknown HOLIDAY_STORAGE backend '{backend}' "
            f"(expected one of: {', '.join(sorted(STORAGE_BACKENDS))})"
        )

    if backend == "memory":
        logger.warning("HOLIDAY_STORAGE=memory -> entries will not survive a restart")
        return InMemoryKeyValueStore()

    return SqlKeyValueStore(SessionLocal)
