"""Tests for SQLite snapshot persistence."""

from __future__ import annotations

import logging
from datetime import date, datetime

from neofit.db.snapshot import DEFAULT_STORAGE_KEY, SnapshotRepository


class TestSnapshotRepository:
    def test_load_without_snapshot_gives_defaults(self, temp_db):
        repo = SnapshotRepository(temp_db)
        store = repo.load()
        assert store.latest_weight() == 80.0
        assert store.workouts == []

    def test_save_and_load(self, temp_db):
        repo = SnapshotRepository(temp_db)
        store = repo.load()
        store.add_weight_entry(date(2024, 2, 1), 78.0)
        repo.save(store)

        reloaded = repo.load()
        assert reloaded.latest_weight() == 78.0

    def test_attach_saves_every_mutation(self, temp_db):
        repo = SnapshotRepository(temp_db)
        store = repo.open()
        store.set_profile(age=41)
        store.add_workout("Rowing", datetime(2024, 3, 5, 6), 40, 350)

        reloaded = repo.load()
        assert reloaded.get_profile().age == 41
        assert len(reloaded.workouts) == 1

    def test_detach(self, temp_db):
        repo = SnapshotRepository(temp_db)
        store = repo.load()
        detach = repo.attach(store)
        store.set_profile(age=41)
        detach()
        store.set_profile(age=50)

        assert repo.load().get_profile().age == 41

    def test_keys_are_isolated(self, temp_db):
        a = SnapshotRepository(temp_db, key="a")
        b = SnapshotRepository(temp_db, key="b")
        store = a.open()
        store.set_profile(age=60)

        assert b.load().get_profile().age == 30
        assert a.load().get_profile().age == 60

    def test_invalid_payload_falls_back_to_defaults(self, temp_db, caplog):
        with temp_db.get_connection() as conn:
            conn.execute(
                "INSERT INTO app_state (storage_key, payload) VALUES (?, ?)",
                (DEFAULT_STORAGE_KEY, "{not json"),
            )
        with caplog.at_level(logging.WARNING, logger="neofit.db.snapshot"):
            store = SnapshotRepository(temp_db).load()

        assert store.get_profile().age == 30
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "not valid JSON" in warnings[0].getMessage()

    def test_clear(self, temp_db):
        repo = SnapshotRepository(temp_db)
        store = repo.open()
        store.set_profile(age=41)
        repo.clear()
        assert repo.load().get_profile().age == 30
