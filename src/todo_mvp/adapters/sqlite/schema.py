"""Database schema definitions for the local SQLite vault.

A single ``tasks`` table holds one row per task.
"""

from __future__ import annotations

SCHEMA_VERSION = 1

TABLE_NAME = "tasks"
COLUMN_ENTRY_ID = "entryid"
COLUMN_TITLE = "title"
COLUMN_DESCRIPTION = "description"
COLUMN_COMPLETED = "completed"

ALL_COLUMNS = (COLUMN_ENTRY_ID, COLUMN_TITLE, COLUMN_DESCRIPTION, COLUMN_COMPLETED)

CREATE_TASKS_TABLE = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    {COLUMN_ENTRY_ID} TEXT PRIMARY KEY,
    {COLUMN_TITLE} TEXT,
    {COLUMN_DESCRIPTION} TEXT,
    {COLUMN_COMPLETED} INTEGER NOT NULL DEFAULT 0
)
"""

CREATE_SCHEMA_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
)
"""

ALL_TABLES = [CREATE_TASKS_TABLE, CREATE_SCHEMA_VERSION_TABLE]
