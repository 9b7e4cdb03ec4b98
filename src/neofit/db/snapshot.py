"""Load and save the full Store snapshot under a fixed storage key."""

from __future__ import annotations

import json
import logging
from typing import Callable

from neofit.db.connection import DatabaseConnection
from neofit.tracking.serialization import deserialize_store, serialize_store
from neofit.tracking.store import Store

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "neofit-storage"


class SnapshotRepository:
    """Persists a Store as one JSON document in the ``app_state`` table."""

    def __init__(self, db: DatabaseConnection, key: str = DEFAULT_STORAGE_KEY):
        self.db = db
        self.key = key
        self.db.initialize_schema()

    def load(self) -> Store:
        """Return the stored snapshot, or a default Store if none exists.

        A payload that is not valid JSON is logged and replaced by defaults
        on the next save.
        """
        with self.db.get_connection() as conn:
            row = conn.execute(
                "SELECT payload FROM app_state WHERE storage_key = ?",
                (self.key,),
            ).fetchone()

        if row is None:
            logger.debug("no snapshot under %r, using defaults", self.key)
            return Store()

        try:
            data = json.loads(row["payload"])
        except json.JSONDecodeError:
            logger.warning("snapshot under %r is not valid JSON, using defaults", self.key)
            return Store()

        logger.debug("loaded snapshot %r", self.key)
        return deserialize_store(data)

    def save(self, store: Store) -> None:
        """Serialize the whole store, replacing any previous snapshot."""
        payload = json.dumps(serialize_store(store))
        with self.db.get_connection() as conn:
            conn.execute(
                """
                INSERT INTO app_state (storage_key, payload, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(storage_key) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
                """,
                (self.key, payload),
            )
        logger.debug("saved snapshot %r (%d bytes)", self.key, len(payload))

    def clear(self) -> None:
        """Delete the snapshot so the next load returns defaults."""
        with self.db.get_connection() as conn:
            conn.execute("DELETE FROM app_state WHERE storage_key = ?", (self.key,))

    def attach(self, store: Store) -> Callable[[], None]:
        """Save ``store`` after every mutation.

        Returns:
            Callable that stops the automatic saving
        """
        return store.subscribe(self.save)

    def open(self) -> Store:
        """Load the snapshot and attach to it in one step."""
        store = self.load()
        self.attach(store)
        return store
