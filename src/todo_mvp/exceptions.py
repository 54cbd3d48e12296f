"""Exception types raised by todo-mvp repositories and services."""


class TodoMvpError(Exception):
    """Base class for all todo-mvp errors."""


class PreconditionError(TodoMvpError):
    """Raised when an operation is called before its required state exists.

    The task cache coordinator raises this for id-based operations issued
    before any read has populated the cache. This is a programming error in
    the caller, not a recoverable condition.
    """


class TaskNotFoundError(TodoMvpError):
    """Raised when a task id is present in neither the local nor remote store."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class EmptyTaskError(TodoMvpError):
    """Raised when a task would be saved with neither title nor description."""

    def __init__(self, message: str = "Task must have a title or a description"):
        super().__init__(message)
