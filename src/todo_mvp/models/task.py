"""Task data models."""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class Task(BaseModel):
    """Immutable task value.

    Completing, activating or editing a task produces a new Task with the
    same id (see ``as_completed`` / ``as_active`` / ``model_copy``).

    Attributes:
        id: Unique identifier, generated at creation when not supplied
        title: Optional short title
        description: Optional longer description
        completed: Completion status
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str | None = None
    description: str | None = None
    completed: bool = False

    @property
    def active(self) -> bool:
        return not self.completed

    @property
    def is_empty(self) -> bool:
        """True when both title and description are blank."""
        return _is_blank(self.title) and _is_blank(self.description)

    @property
    def title_for_list(self) -> str | None:
        """Title when present, otherwise the description."""
        if not _is_blank(self.title):
            return self.title
        return self.description

    def as_completed(self) -> Task:
        return self.model_copy(update={"completed": True})

    def as_active(self) -> Task:
        return self.model_copy(update={"completed": False})

    def __str__(self) -> str:
        return f"Task with title {self.title}"


class TaskFilterType(str, Enum):
    """Which tasks a listing should show."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    def matches(self, task: Task) -> bool:
        if self is TaskFilterType.ACTIVE:
            return task.active
        if self is TaskFilterType.COMPLETED:
            return task.completed
        return True


class TaskStatistics(BaseModel):
    """Completion statistics over the full task set.

    Attributes:
        active: Number of tasks not yet completed
        completed: Number of completed tasks
    """

    active: int = 0
    completed: int = 0

    @property
    def total(self) -> int:
        return self.active + self.completed

    @property
    def completed_percent(self) -> float:
        if self.total == 0:
            return 0.0
        return 100.0 * self.completed / self.total

    @property
    def active_percent(self) -> float:
        if self.total == 0:
            return 0.0
        return 100.0 * self.active / self.total
