"""Adapters module - TaskStore implementations for different storage backends.

- sqlite: Local SQLite database storage
- memory: In-memory stand-in for the remote store
- rest_api: Remote REST API backend
"""

from .memory import InMemoryTaskStore
from .rest_api import RestApiTaskStore
from .sqlite import SqliteTaskStore

__all__ = [
    "SqliteTaskStore",
    "InMemoryTaskStore",
    "RestApiTaskStore",
]
