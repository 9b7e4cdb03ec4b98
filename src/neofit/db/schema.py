"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- Serialized application state, one JSON document per storage key
CREATE TABLE IF NOT EXISTS app_state (
    storage_key TEXT PRIMARY KEY,
    payload TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
