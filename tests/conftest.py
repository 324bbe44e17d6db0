import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

REPO_ROOT = Path(__file__).resolve().parents[1]

# Prefer repo sources over any installed package.
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from app.services.storage import InMemoryKeyValueStore  # noqa: E402
from app.services.tracker import HolidayTracker, get_tracker  # noqa: E402
from main import app  # noqa: E402


class SequentialIds:
    def __init__(self) -> None:
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return str(self.issued)


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def tracker(storage):
    tracker = HolidayTracker(storage, id_factory=SequentialIds())
    tracker.start()
    return tracker


@pytest.fixture
def client(tracker):
    app.dependency_overrides[get_tracker] = lambda: tracker
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
