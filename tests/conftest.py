"""Pytest fixtures for neofit tests."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from neofit.db.connection import DatabaseConnection
from neofit.tracking.models import Gender, UserProfile
from neofit.tracking.store import Store


@pytest.fixture
def store():
    """Fresh store with the default profile (male, 30y, 175cm, 80kg)."""
    return Store()


@pytest.fixture
def female_store():
    """Store with a female profile."""
    return Store(
        profile=UserProfile(gender=Gender.FEMALE, age=28, height=165.0, weight=60.0, body_fat=25.0)
    )


@pytest.fixture
def now():
    """Fixed reference time in the middle of March 2024."""
    return datetime(2024, 3, 15, 12, 0)


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)
