"""Repository abstraction layer for todo-mvp.

This module defines the task store interface shared by every storage backend
(local SQLite, in-memory stub, remote REST API) and by the task cache
coordinator that sits in front of them, following the Ports & Adapters
pattern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from todo_mvp.models import Task

TaskRef = Union[Task, str]


def task_id_of(task: TaskRef) -> str:
    """Return the id of a Task, or the string itself when given an id."""
    if isinstance(task, Task):
        return task.id
    return task


class TaskStore(ABC):
    """Abstract base class for task persistence operations.

    Implementations are treated as black boxes: every call either completes
    or raises, and callers do not know how data is persisted.
    """

    @abstractmethod
    async def list_tasks(self) -> list[Task]:
        """List every task in the store.

        Returns:
            List of Task objects (possibly empty)

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskStore.list_tasks() must be implemented by adapter")

    @abstractmethod
    async def get_task(self, task_id: str) -> Task | None:
        """Get a specific task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None if the store does not hold it

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskStore.get_task() must be implemented by adapter")

    @abstractmethod
    async def save_task(self, task: Task) -> None:
        """Insert or replace a task.

        Args:
            task: Task to persist, keyed by its id

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskStore.save_task() must be implemented by adapter")

    @abstractmethod
    async def complete_task(self, task: TaskRef) -> None:
        """Mark a task as completed.

        Args:
            task: Task object or task id

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskStore.complete_task() must be implemented by adapter"
        )

    @abstractmethod
    async def activate_task(self, task: TaskRef) -> None:
        """Mark a task as active (not completed).

        Args:
            task: Task object or task id

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskStore.activate_task() must be implemented by adapter"
        )

    @abstractmethod
    async def clear_completed_tasks(self) -> None:
        """Delete every completed task.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskStore.clear_completed_tasks() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_all_tasks(self) -> None:
        """Delete every task.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskStore.delete_all_tasks() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_task(self, task_id: str) -> None:
        """Delete a task. Deleting an unknown id is not an error.

        Args:
            task_id: Unique identifier for the task

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskStore.delete_task() must be implemented by adapter")

    async def refresh_tasks(self) -> None:
        """Invalidate any cached state. No-op for stores that do not cache."""
        return None
