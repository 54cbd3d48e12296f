"""SQLite adapter module - Local database storage implementation."""

from todo_mvp.adapters.sqlite.connection import default_db_path, open_connection
from todo_mvp.adapters.sqlite.task_store import SqliteTaskStore

__all__ = [
    "SqliteTaskStore",
    "default_db_path",
    "open_connection",
]
