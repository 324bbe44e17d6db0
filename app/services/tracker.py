import logging
import threading
from typing import Any, Callable

from fastapi import Request

from app.services.entry_store import EntryStore, display_order
from app.services.file_transfer import ExportedFile, FileTransfer
from app.services.form_controller import FormController, new_entry_id
from app.services.notifications import Notification, Notifier
from app.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


class EntryNotFoundError(LookupError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f"Holiday entry '{entry_id}' not found.")
        self.entry_id = entry_id


def delete_confirmation_prompt(location: str) -> str:
    return f"Are you sure you want to delete your holiday to {location}?"


class HolidayTracker:
    """The travel log: one store, one form, one toast queue.

    Each public method is one user command; commands run one at a time.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        id_factory: Callable[[], str] = new_entry_id,
    ) -> None:
        self.notifier = Notifier()
        self.store = EntryStore(storage)
        self.form = FormController(self.store, self.notifier, id_factory=id_factory)
        self.files = FileTransfer(self.store, self.notifier)
        self._lock = threading.RLock()

    def start(self) -> None:
        with self._lock:
            self.store.initialize()
        logger.info("Holiday tracker ready with %d entries", len(self.store))

    def list_entries(self, display: bool = True) -> list[dict[str, Any]]:
        with self._lock:
            entries = self.store.entries
        return display_order(entries) if display else entries

    def form_fields(self) -> dict[str, str]:
        with self._lock:
            return self.form.fields()

    def update_form(
        self,
        year: str | None = None,
        month: str | None = None,
        location: str | None = None,
    ) -> dict[str, str]:
        with self._lock:
            if year is not None:
                self.form.set_year(year)
            if month is not None:
                self.form.set_month(month)
            if location is not None:
                self.form.set_location(location)
            return self.form.fields()

    def submit_form(self) -> dict[str, Any] | None:
        with self._lock:
            return self.form.submit()

    def add_holiday(self, year: str, month: str, location: str) -> dict[str, Any] | None:
        # Incomplete requests leave the pending form untouched.
        if not (year and month and location):
            return None
        with self._lock:
            self.update_form(year=year, month=month, location=location)
            return self.form.submit()

    def delete_entry(self, entry_id: str, confirm: Callable[[str], bool]) -> bool:
        with self._lock:
            entry = self.store.find(entry_id)
            if entry is None:
                raise EntryNotFoundError(entry_id)

            location = entry.get("location", "")
            if not confirm(delete_confirmation_prompt(location)):
                return False

            self.store.remove(entry_id)
            self.notifier.notify("Holiday deleted", f"Your trip to {location} has been removed.")
            return True

    def save_to_file(self) -> ExportedFile:
        with self._lock:
            return self.files.save_to_file()

    def load_from_file(self, contents: bytes | str | None) -> list[dict[str, Any]] | None:
        with self._lock:
            return self.files.load_from_file(contents)

    def drain_notifications(self) -> list[Notification]:
        with self._lock:
            return self.notifier.drain()


def get_tracker(request: Request) -> HolidayTracker:
    tracker = getattr(request.app.state, "tracker", None)
    if tracker is None:
        raise RuntimeError("Holiday tracker is not initialized; startup has not run.")
    return tracker
