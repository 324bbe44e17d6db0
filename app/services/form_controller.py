import uuid
from typing import Any, Callable

from app.services.entry_store import EntryStore
from app.services.notifications import Notifier


def new_entry_id() -> str:
    return str(uuid.uuid4())


class FormController:
    def __init__(
        self,
        store: EntryStore,
        notifier: Notifier,
        id_factory: Callable[[], str] = new_entry_id,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._id_factory = id_factory
        self.year = ""
        self.month = ""
        self.location = ""

    def set_year(self, value: str) -> None:
        self.year = value

    def set_month(self, value: str) -> None:
        self.month = value

    def set_location(self, value: str) -> None:
        self.location = value

    def fields(self) -> dict[str, str]:
        return {"year": self.year, "month": self.month, "location": self.location}

    def clear(self) -> None:
        self.year = ""
        self.month = ""
        self.location = ""

    def submit(self) -> dict[str, Any] | None:
        """Add the pending input as a new entry.

        Returns the new entry, or None when a field is empty (the input is
        left untouched and nothing is announced).
        """
        if not (self.year and self.month and self.location):
            return None

        location = self.location
        entry = {
            "id": self._id_factory(),
            "year": self.year,
            "month": self.month,
            "location": location,
        }
        self._store.add(entry)
        self.clear()
        self._notifier.notify("Holiday added", f"Your trip to {location} has been added.")
        return entry
