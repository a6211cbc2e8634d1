# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdeck.storage.blob_store import MemoryBlobStore
from taskdeck.storage.persistence import PersistenceAdapter
from taskdeck.tasks.store import TaskStore

from .fakes import FakeClock, RecordingSink, SequentialIds

# Thursday. 2026-10-12 is the Monday of that week.
NOW = datetime(2026, 10, 15, 10, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap code.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdeck-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        state_db_path=tmp_path / "state.sqlite3",
        state_key="taskdeck-data",
        week_starts_on=0,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture()
def store(blobs: MemoryBlobStore, sink: RecordingSink, clock: FakeClock) -> TaskStore:
    """
    TaskStore wired to an in-memory blob store and a recording sink.

    Ids are sequential so failures are readable.
    """
    return TaskStore(
        PersistenceAdapter(blobs),
        sink=sink,
        clock=clock,
        new_id=SequentialIds(),
    )
