"""SQLite persistence for application snapshots."""

from __future__ import annotations

from neofit.db.connection import DatabaseConnection, get_db, set_db
from neofit.db.snapshot import SnapshotRepository

__all__ = ["DatabaseConnection", "SnapshotRepository", "get_db", "set_db"]
