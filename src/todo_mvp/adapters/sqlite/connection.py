"""Database connection management for the local SQLite vault.

Connections are opened explicitly and owned by the store that uses them;
there is no process-wide connection singleton.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todo_mvp.adapters.sqlite import schema

logger = logging.getLogger(__name__)

_APP_NAME = "todo_mvp"
_DB_FILE = "vault.db"


def default_db_path() -> Path:
    """Return the default vault location under the user data directory."""
    return Path(user_data_dir(_APP_NAME)) / _DB_FILE


def open_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open and configure a connection to the local vault.

    Provides:
    - Automatic directory creation
    - WAL mode for better concurrency
    - Owner-only file permissions on a new database
    - Schema creation when missing

    Args:
        db_path: Path to database file, ":memory:" for an in-memory database,
            or None for the default location.

    Returns:
        sqlite3.Connection with ``sqlite3.Row`` row factory
    """
    in_memory = str(db_path) == ":memory:"
    path = Path(db_path) if db_path is not None else default_db_path()

    is_new_database = False
    if not in_memory:
        path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not path.exists()

    connection = sqlite3.connect(
        ":memory:" if in_memory else str(path),
        check_same_thread=False,
        timeout=30.0,  # Wait up to 30s for locks
    )
    connection.row_factory = sqlite3.Row
    if not in_memory:
        connection.execute("PRAGMA journal_mode = WAL")
        if is_new_database:
            os.chmod(path, 0o600)

    apply_schema(connection)
    logger.debug("opened task vault at %s", ":memory:" if in_memory else path)
    return connection


def apply_schema(connection: sqlite3.Connection) -> None:
    """Create tables and record the schema version."""
    for statement in schema.ALL_TABLES:
        connection.execute(statement)
    connection.execute(
        "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
        (schema.SCHEMA_VERSION,),
    )
    connection.commit()


async def execute_with_retry(
    connection: sqlite3.Connection,
    sql: str,
    params: tuple | dict | None = None,
    max_retries: int = 3,
) -> sqlite3.Cursor:
    """Execute SQL with retry logic for database locked errors.

    Backs off with ``asyncio.sleep`` so a locked vault does not block the
    event loop.

    Args:
        connection: Database connection
        sql: SQL statement to execute
        params: Parameters for SQL statement
        max_retries: Maximum number of attempts

    Returns:
        Cursor after successful execution

    Raises:
        sqlite3.OperationalError: If database remains locked after retries
    """
    for attempt in range(max_retries):
        try:
            if params:
                return connection.execute(sql, params)
            return connection.execute(sql)
        except sqlite3.OperationalError as e:
            if "database is locked" in str(e) and attempt < max_retries - 1:
                # Exponential backoff: 0.1s, 0.2s, 0.4s
                await asyncio.sleep(0.1 * (2**attempt))
                continue
            raise

    raise sqlite3.OperationalError("Max retries exceeded")
