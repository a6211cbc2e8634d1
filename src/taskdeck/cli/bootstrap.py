# src/taskdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite blob store, persistence adapter and event sink into a TaskStore.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import EventSink
from ..storage.blob_store import SqliteBlobStore
from ..storage.persistence import PersistenceAdapter
from ..tasks.store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.state_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_store(*, settings=None, sink: EventSink | None = None) -> TaskStore:
    """
    Create the TaskStore from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    persistence = PersistenceAdapter(
        SqliteBlobStore(settings.state_db_path),
        key=settings.state_key,
    )
    logger.info("State database: %s (key=%s)", settings.state_db_path, settings.state_key)
    return TaskStore(persistence, sink=sink, week_starts_on=settings.week_starts_on)
