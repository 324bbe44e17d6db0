import logging
from typing import Any, Iterable, Sequence

from app.services.entry_codec import InvalidEntriesError, decode_entries, encode_entries
from app.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "holidayEntries"


class EntryStore:
    """Ordered holiday entries, newest first, written through to storage.

    Every mutation replaces the in-memory list and then persists the full
    list under ``key``. A failed write leaves the in-memory change in place
    and propagates the storage error.
    """

    def __init__(self, storage: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._entries: list[dict[str, Any]] = []
        self._initialized = False

    @property
    def entries(self) -> list[dict[str, Any]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def initialize(self) -> None:
        if self._initialized:
            return
        self._initialized = True

        stored = self._storage.get(self._key)
        if not stored:
            return
        try:
            self._entries = decode_entries(stored)
        except InvalidEntriesError as exc:
            # Left in storage as-is; the next mutation overwrites it.
            logger.warning("Ignoring malformed '%s' in storage: %s", self._key, exc)
            self._entries = []

    def find(self, entry_id: str) -> dict[str, Any] | None:
        for entry in self._entries:
            if entry.get("id") == entry_id:
                return entry
        return None

    def add(self, entry: dict[str, Any]) -> None:
        self._entries = [entry, *self._entries]
        self._sync()

    def remove(self, entry_id: str) -> bool:
        remaining = [entry for entry in self._entries if entry.get("id") != entry_id]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        self._sync()
        return removed

    def replace_all(self, entries: Iterable[dict[str, Any]]) -> None:
        self._entries = list(entries)
        self._sync()

    def _sync(self) -> None:
        self._storage.set(self._key, encode_entries(self._entries))


def display_order(entries: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    # Years compare as strings, newest first; ties keep store order.
    return sorted(entries, key=lambda entry: entry["year"], reverse=True)
