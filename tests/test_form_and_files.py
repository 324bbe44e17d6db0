import json

import pytest

from app.services import file_transfer
from app.services.entry_store import STORAGE_KEY
from app.services.file_transfer import (
    EXPORT_FILENAME,
    LOAD_ERROR_MESSAGE,
    SAVE_ERROR_MESSAGE,
    FileTransferError,
)


def _fill(tracker, year="2024", month="July", location="Lisbon"):
    tracker.update_form(year=year, month=month, location=location)


def test_submit_prepends_entry_and_clears_fields(tracker):
    _fill(tracker, location="Rome")
    tracker.submit_form()
    _fill(tracker, year="2024", month="July", location="Lisbon")

    entry = tracker.submit_form()

    assert entry == {"id": "2", "year": "2024", "month": "July", "location": "Lisbon"}
    assert tracker.store.entries[0] == entry
    assert len(tracker.store) == 2
    assert tracker.form_fields() == {"year": "", "month": "", "location": ""}


def test_submit_announces_location(tracker):
    _fill(tracker)
    tracker.submit_form()

    [notification] = tracker.drain_notifications()
    assert notification.title == "Holiday added"
    assert notification.description == "Your trip to Lisbon has been added."
    assert notification.variant == "default"


@pytest.mark.parametrize("missing", ["year", "month", "location"])
def test_submit_with_empty_field_is_ignored(tracker, missing):
    _fill(tracker)
    tracker.update_form(**{missing: ""})
    before = tracker.form_fields()

    assert tracker.submit_form() is None
    assert len(tracker.store) == 0
    assert tracker.form_fields() == before
    assert tracker.drain_notifications() == []


def test_setters_do_not_validate_format(tracker):
    fields = tracker.update_form(year=" 20x4 ", location="  ")
    assert fields["year"] == " 20x4 "
    assert fields["location"] == "  "


def test_default_ids_are_unique(storage):
    from app.services.tracker import HolidayTracker

    tracker = HolidayTracker(storage)
    ids = set()
    for _ in range(20):
        ids.add(tracker.add_holiday("2024", "July", "Lisbon")["id"])
    assert len(ids) == 20


def test_delete_confirmed_removes_entry(tracker):
    tracker.load_from_file(
        json.dumps([{"id": "1", "year": "2024", "month": "July", "location": "Lisbon"}])
    )
    tracker.drain_notifications()
    prompts = []

    def confirm(prompt):
        prompts.append(prompt)
        return True

    assert tracker.delete_entry("1", confirm) is True
    assert tracker.store.entries == []
    assert prompts == ["Are you sure you want to delete your holiday to Lisbon?"]
    [notification] = tracker.drain_notifications()
    assert notification.title == "Holiday deleted"
    assert notification.description == "Your trip to Lisbon has been removed."


def test_delete_declined_changes_nothing(tracker):
    _fill(tracker)
    entry = tracker.submit_form()
    tracker.drain_notifications()

    assert tracker.delete_entry(entry["id"], lambda prompt: False) is False
    assert tracker.store.entries == [entry]
    assert tracker.drain_notifications() == []


def test_delete_unknown_entry_raises(tracker):
    from app.services.tracker import EntryNotFoundError

    with pytest.raises(EntryNotFoundError):
        tracker.delete_entry("nope", lambda prompt: True)


def test_save_to_file_is_pretty_printed_in_store_order(tracker):
    _fill(tracker, year="2019", location="Oslo")
    tracker.submit_form()
    _fill(tracker, year="2023", location="Kraków")
    tracker.submit_form()
    tracker.drain_notifications()

    exported = tracker.save_to_file()

    assert exported.filename == EXPORT_FILENAME
    assert exported.media_type == "application/json"
    text = exported.content.decode("utf-8")
    assert text == json.dumps(tracker.store.entries, indent=2, ensure_ascii=False)
    assert text.startswith('[\n  {\n    "id": "2",')
    assert "Kraków" in text
    [notification] = tracker.drain_notifications()
    assert notification.title == "File saved"


def test_save_to_file_failure_leaves_store_and_reports(tracker, monkeypatch):
    _fill(tracker)
    tracker.submit_form()
    tracker.drain_notifications()

    def broken_encode(entries, indent=None):
        raise TypeError("Object of type object is not JSON serializable")

    monkeypatch.setattr(file_transfer, "encode_entries", broken_encode)
    before = tracker.store.entries

    with pytest.raises(FileTransferError) as excinfo:
        tracker.save_to_file()

    assert excinfo.value.description == SAVE_ERROR_MESSAGE
    assert tracker.store.entries == before
    [notification] = tracker.drain_notifications()
    assert notification.title == "Error"
    assert notification.variant == "destructive"


def test_export_then_import_round_trips(tracker, storage):
    for year, location in [("2021", "Rome"), ("2024", "Lisbon"), ("2019", "Oslo")]:
        _fill(tracker, year=year, location=location)
        tracker.submit_form()
    original = tracker.store.entries
    exported = tracker.save_to_file()

    tracker.store.replace_all([])
    tracker.load_from_file(exported.content)

    assert tracker.store.entries == original
    assert json.loads(storage.get(STORAGE_KEY)) == original


def test_import_replaces_existing_entries(tracker):
    _fill(tracker)
    tracker.submit_form()
    tracker.drain_notifications()
    payload = [{"id": "x", "year": "2020", "month": "May", "location": "Rome"}]

    loaded = tracker.load_from_file(json.dumps(payload).encode("utf-8"))

    assert loaded == payload
    assert tracker.store.entries == payload
    [notification] = tracker.drain_notifications()
    assert notification.title == "File loaded"


def test_import_keeps_unknown_keys(tracker):
    payload = [{"id": "x", "year": "2020", "month": "May", "location": "Rome", "notes": "pasta"}]
    tracker.load_from_file(json.dumps(payload))
    assert tracker.store.entries == payload


def test_import_accepts_utf8_bom(tracker):
    payload = [{"id": "x", "year": "2020", "month": "May", "location": "Rome"}]
    tracker.load_from_file(b"\xef\xbb\xbf" + json.dumps(payload).encode("utf-8"))
    assert tracker.store.entries == payload


def test_import_cancelled_changes_nothing(tracker):
    _fill(tracker)
    entry = tracker.submit_form()
    tracker.drain_notifications()

    assert tracker.load_from_file(None) is None
    assert tracker.store.entries == [entry]
    assert tracker.drain_notifications() == []


@pytest.mark.parametrize(
    "contents",
    [
        b"{not json",
        b"\xff\xfe\x00garbage",
        b'{"id": "x"}',
        b'[{"id": "x", "year": 2020, "month": "May", "location": "Rome"}]',
        b'[{"id": "x", "month": "May", "location": "Rome"}]',
        b'["Rome"]',
        b"[" * 100000 + b"]" * 100000,
        b'[{"id": "x", "year": "2020", "month": "May", "location": "Rome", "rating": NaN}]',
        b'[{"id": "x", "year": "2020", "month": "May", "location": "Rome", "km": Infinity}]',
    ],
    ids=[
        "not-json",
        "not-utf8",
        "object",
        "numeric-year",
        "missing-year",
        "strings",
        "deeply-nested",
        "nan",
        "infinity",
    ],
)
def test_import_rejects_unreadable_files(tracker, storage, contents):
    _fill(tracker)
    entry = tracker.submit_form()
    tracker.drain_notifications()
    persisted = storage.get(STORAGE_KEY)

    with pytest.raises(FileTransferError) as excinfo:
        tracker.load_from_file(contents)

    assert excinfo.value.description == LOAD_ERROR_MESSAGE
    assert tracker.store.entries == [entry]
    assert storage.get(STORAGE_KEY) == persisted
    [notification] = tracker.drain_notifications()
    assert notification.title == "Error"
    assert notification.description == LOAD_ERROR_MESSAGE
    assert notification.variant == "destructive"


def test_incomplete_add_leaves_pending_form_untouched(tracker):
    tracker.update_form(year="2021", month="", location="")

    assert tracker.add_holiday("2024", "July", "") is None
    assert tracker.form_fields() == {"year": "2021", "month": "", "location": ""}
    assert len(tracker.store) == 0
