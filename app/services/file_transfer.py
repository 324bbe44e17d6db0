import logging
from dataclasses import dataclass
from typing import Any

from app.services.entry_codec import InvalidEntriesError, decode_entries, encode_entries
from app.services.entry_store import EntryStore
from app.services.notifications import Notifier

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "holiday-entries.json"
EXPORT_MEDIA_TYPE = "application/json"
EXPORT_INDENT = 2

SAVE_ERROR_MESSAGE = "There was an error saving the file. Please try again."
LOAD_ERROR_MESSAGE = "There was an error reading the file. Please try again."


class FileTransferError(Exception):
    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    media_type: str
    content: bytes


class FileTransfer:
    def __init__(self, store: EntryStore, notifier: Notifier) -> None:
        self._store = store
        self._notifier = notifier

    def save_to_file(self) -> ExportedFile:
        try:
            text = encode_entries(self._store.entries, indent=EXPORT_INDENT)
            content = text.encode("utf-8")
        except (TypeError, ValueError) as exc:
            logger.exception("Error saving file")
            self._notifier.error(SAVE_ERROR_MESSAGE)
            raise FileTransferError(SAVE_ERROR_MESSAGE) from exc

        self._notifier.notify("File saved", "Your holiday entries have been saved to a file.")
        return ExportedFile(
            filename=EXPORT_FILENAME,
            media_type=EXPORT_MEDIA_TYPE,
            content=content,
        )

    def load_from_file(self, contents: bytes | str | None) -> list[dict[str, Any]] | None:
        """Replace the store with the entries in an uploaded file.

        ``None`` stands for a dismissed file picker: nothing changes and
        nothing is announced.
        """
        if contents is None:
            return None

        try:
            if isinstance(contents, bytes):
                contents = contents.decode("utf-8-sig")
            entries = decode_entries(contents)
        except (UnicodeDecodeError, InvalidEntriesError) as exc:
            logger.error("Error reading file: %s", exc)
            self._notifier.error(LOAD_ERROR_MESSAGE)
            raise FileTransferError(LOAD_ERROR_MESSAGE) from exc

        self._store.replace_all(entries)
        self._notifier.notify("File loaded", "Your holiday entries have been loaded from the file.")
        return entries
