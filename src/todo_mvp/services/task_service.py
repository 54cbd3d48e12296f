"""Task service - Business logic for task operations.

This service layer sits between commands and the task cache coordinator,
providing the list / detail / add-edit / statistics behaviour of the app.
"""

from __future__ import annotations

import logging

from todo_mvp.exceptions import EmptyTaskError, TaskNotFoundError
from todo_mvp.models import Task, TaskFilterType, TaskStatistics
from todo_mvp.repositories import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using a task store (normally a TaskCacheCoordinator).
    """

    def __init__(self, task_store: TaskStore):
        """Initialize the task service.

        Args:
            task_store: TaskStore implementation for data access
        """
        self.store = task_store

    async def load_tasks(
        self,
        filter_type: TaskFilterType = TaskFilterType.ALL,
        *,
        force_update: bool = False,
    ) -> list[Task]:
        """List tasks matching a status filter.

        Args:
            filter_type: Which tasks to return
            force_update: Refresh from the remote store before listing

        Returns:
            Tasks in listing order
        """
        if force_update:
            await self.store.refresh_tasks()
        tasks = await self.store.list_tasks()
        return [task for task in tasks if filter_type.matches(task)]

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If no store holds the task
        """
        task = await self.store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def add_task(self, title: str | None, description: str | None = None) -> Task:
        """Create and save a new task.

        Args:
            title: Task title
            description: Task description

        Returns:
            Created Task object

        Raises:
            EmptyTaskError: If both title and description are blank
        """
        task = Task(title=title, description=description)
        if task.is_empty:
            raise EmptyTaskError()
        await self.store.save_task(task)
        logger.info("task created: %s", task.id)
        return task

    async def update_task(
        self,
        task_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
    ) -> Task:
        """Update the title and/or description of an existing task.

        Fields left as None keep their current value. Completion status is
        preserved.

        Raises:
            TaskNotFoundError: If the task does not exist
            EmptyTaskError: If the edit leaves the task empty
        """
        current = await self.get_task(task_id)
        updates: dict[str, str] = {}
        if title is not None:
            updates["title"] = title
        if description is not None:
            updates["description"] = description

        task = current.model_copy(update=updates)
        if task.is_empty:
            raise EmptyTaskError()
        await self.store.save_task(task)
        logger.info("task updated: %s", task.id)
        return task

    async def complete_task(self, task_id: str) -> Task:
        """Mark a task as completed."""
        task = await self.get_task(task_id)
        await self.store.complete_task(task)
        return task.as_completed()

    async def activate_task(self, task_id: str) -> Task:
        """Mark a completed task as active again."""
        task = await self.get_task(task_id)
        await self.store.activate_task(task)
        return task.as_active()

    async def delete_task(self, task_id: str) -> Task:
        """Delete a task.

        Returns:
            The deleted task
        """
        task = await self.get_task(task_id)
        await self.store.delete_task(task.id)
        logger.info("task deleted: %s", task.id)
        return task

    async def clear_completed_tasks(self) -> int:
        """Delete every completed task.

        Returns:
            Number of completed tasks that were listed before clearing
        """
        completed = await self.load_tasks(TaskFilterType.COMPLETED)
        await self.store.clear_completed_tasks()
        return len(completed)

    async def delete_all_tasks(self) -> None:
        await self.store.delete_all_tasks()

    async def get_statistics(self) -> TaskStatistics:
        """Count active and completed tasks."""
        tasks = await self.store.list_tasks()
        completed = sum(1 for task in tasks if task.completed)
        return TaskStatistics(active=len(tasks) - completed, completed=completed)
