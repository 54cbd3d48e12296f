"""SQLite implementation of TaskStore."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from todo_mvp.adapters.sqlite.connection import execute_with_retry, open_connection
from todo_mvp.adapters.sqlite.schema import (
    ALL_COLUMNS,
    COLUMN_COMPLETED,
    COLUMN_DESCRIPTION,
    COLUMN_ENTRY_ID,
    COLUMN_TITLE,
    TABLE_NAME,
)
from todo_mvp.models import Task
from todo_mvp.repositories import TaskRef, TaskStore, task_id_of

_SELECT = f"SELECT {', '.join(ALL_COLUMNS)} FROM {TABLE_NAME}"


class SqliteTaskStore(TaskStore):
    """Local persistent task store backed by a single SQLite table."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task store.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional pre-opened connection (schema must be applied).
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or open the database connection."""
        if self._connection is None:
            self._connection = open_connection(self.db_path)
        return self._connection

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row[COLUMN_ENTRY_ID],
            title=row[COLUMN_TITLE],
            description=row[COLUMN_DESCRIPTION],
            completed=bool(row[COLUMN_COMPLETED]),
        )

    async def list_tasks(self) -> list[Task]:
        cursor = self.connection.execute(f"{_SELECT} ORDER BY rowid")
        return [self._row_to_task(row) for row in cursor.fetchall()]

    async def get_task(self, task_id: str) -> Task | None:
        cursor = self.connection.execute(
            f"{_SELECT} WHERE {COLUMN_ENTRY_ID} = ?", (task_id,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def save_task(self, task: Task) -> None:
        # Upsert in place so an existing row keeps its listing position.
        await execute_with_retry(
            self.connection,
            f"""INSERT INTO {TABLE_NAME} (
                {COLUMN_ENTRY_ID}, {COLUMN_TITLE}, {COLUMN_DESCRIPTION}, {COLUMN_COMPLETED}
            ) VALUES (?, ?, ?, ?)
            ON CONFLICT({COLUMN_ENTRY_ID}) DO UPDATE SET
                {COLUMN_TITLE} = excluded.{COLUMN_TITLE},
                {COLUMN_DESCRIPTION} = excluded.{COLUMN_DESCRIPTION},
                {COLUMN_COMPLETED} = excluded.{COLUMN_COMPLETED}""",
            (task.id, task.title, task.description, int(task.completed)),
        )
        self.connection.commit()

    async def complete_task(self, task: TaskRef) -> None:
        await self._set_completed(task_id_of(task), True)

    async def activate_task(self, task: TaskRef) -> None:
        await self._set_completed(task_id_of(task), False)

    async def _set_completed(self, task_id: str, completed: bool) -> None:
        await execute_with_retry(
            self.connection,
            f"UPDATE {TABLE_NAME} SET {COLUMN_COMPLETED} = ? WHERE {COLUMN_ENTRY_ID} = ?",
            (int(completed), task_id),
        )
        self.connection.commit()

    async def clear_completed_tasks(self) -> None:
        await execute_with_retry(
            self.connection, f"DELETE FROM {TABLE_NAME} WHERE {COLUMN_COMPLETED} = 1"
        )
        self.connection.commit()

    async def delete_all_tasks(self) -> None:
        await execute_with_retry(self.connection, f"DELETE FROM {TABLE_NAME}")
        self.connection.commit()

    async def delete_task(self, task_id: str) -> None:
        await execute_with_retry(
            self.connection,
            f"DELETE FROM {TABLE_NAME} WHERE {COLUMN_ENTRY_ID} = ?",
            (task_id,),
        )
        self.connection.commit()
