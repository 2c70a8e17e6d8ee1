from __future__ import annotations

# Browser-style key/value storage: one row per key, value is a JSON string.
SCHEMA_V1_SQL = """
CREATE TABLE local_storage (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""
