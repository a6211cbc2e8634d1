# src/taskdeck/storage/persistence.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.errors import PersistenceError
from ..core.models import AppState
from ..core.ports import BlobStore
from . import codec
from .migrations import SCHEMA_VERSION, migrate

logger = logging.getLogger(__name__)

DEFAULT_STATE_KEY = "taskdeck-data"


class PersistenceAdapter:
    """
    Snapshots AppState into a BlobStore and restores it.

    Failures never propagate: a failed save leaves the in-memory state
    authoritative for the session, a failed load starts from defaults.
    """

    def __init__(self, blob_store: BlobStore, *, key: str = DEFAULT_STATE_KEY) -> None:
        self._blobs = blob_store
        self._key = key

    def save(self, state: AppState) -> bool:
        try:
            text = codec.dumps(codec.state_to_payload(state, schema_version=SCHEMA_VERSION))
            self._blobs.put(self._key, text)
        except (PersistenceError, TypeError, ValueError):
            logger.exception("Failed to save state key=%s", self._key)
            return False
        logger.debug("State saved key=%s tasks=%d", self._key, len(state.tasks))
        return True

    def load(self, *, now: datetime) -> AppState | None:
        try:
            text = self._blobs.get(self._key)
        except PersistenceError:
            logger.exception("Failed to read state key=%s", self._key)
            return None
        if not text:
            return None

        try:
            payload = migrate(codec.loads(text))
            state = codec.payload_to_state(payload, now=now)
        except (KeyError, TypeError, ValueError):
            logger.exception("Stored state key=%s is unreadable; starting fresh", self._key)
            return None

        logger.info(
            "State loaded key=%s tasks=%d lists=%d schema=v%s",
            self._key,
            len(state.tasks),
            len(state.lists),
            payload.get("schemaVersion"),
        )
        return state
