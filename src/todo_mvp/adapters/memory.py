"""In-memory TaskStore used as a stand-in remote store.

Tasks live in a dict. When a snapshot path is given the dict is loaded from
it on creation and written back after every change, so the store outlives
the CLI process. An optional latency is awaited before every call to
imitate a network round trip.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from collections.abc import Iterable
from pathlib import Path

from platformdirs import user_data_dir

from todo_mvp.models import Task
from todo_mvp.repositories import TaskRef, TaskStore

logger = logging.getLogger(__name__)

SEED_TASKS = (
    ("Build tower in Pisa", "Ground looks good, no foundation work required."),
    ("Finish bridge in Tacoma", "Found awesome girders at half the cost!"),
)

_SEED_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "todo-mvp:seed")


def seed_task_id(title: str) -> str:
    """Stable id for a seed task, identical in every process."""
    return str(uuid.uuid5(_SEED_NAMESPACE, title))


def default_snapshot_path() -> Path:
    """Return the default snapshot location under the user data directory."""
    return Path(user_data_dir("todo_mvp")) / "remote.json"


class InMemoryTaskStore(TaskStore):
    """Task store keeping tasks in insertion order in memory."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        latency: float = 0.0,
        path: str | Path | None = None,
    ):
        """Initialize the store.

        Args:
            tasks: Initial contents, ignored when the snapshot file exists
            latency: Seconds to wait before answering each call
            path: Optional JSON snapshot file
        """
        self.latency = latency
        self.path = Path(path) if path is not None else None
        self._tasks: dict[str, Task] = {task.id: task for task in tasks}
        if self.path is not None and self.path.exists():
            self._tasks = self._read_snapshot(self.path)

    @classmethod
    def with_seed_data(
        cls, latency: float = 0.0, path: str | Path | None = None
    ) -> InMemoryTaskStore:
        """Create a store preloaded with the sample tasks."""
        return cls(
            [
                Task(id=seed_task_id(title), title=title, description=desc)
                for title, desc in SEED_TASKS
            ],
            latency=latency,
            path=path,
        )

    @staticmethod
    def _read_snapshot(path: Path) -> dict[str, Task]:
        data = json.loads(path.read_text(encoding="utf-8"))
        tasks = [Task.model_validate(item) for item in data]
        logger.debug("loaded %d tasks from %s", len(tasks), path)
        return {task.id: task for task in tasks}

    def _write_snapshot(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([task.model_dump() for task in self._tasks.values()], indent=2),
            encoding="utf-8",
        )

    async def _simulate_latency(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    async def list_tasks(self) -> list[Task]:
        await self._simulate_latency()
        return list(self._tasks.values())

    async def get_task(self, task_id: str) -> Task | None:
        await self._simulate_latency()
        return self._tasks.get(task_id)

    async def save_task(self, task: Task) -> None:
        await self._simulate_latency()
        self._tasks[task.id] = task
        self._write_snapshot()

    async def complete_task(self, task: TaskRef) -> None:
        await self._simulate_latency()
        current = task if isinstance(task, Task) else self._tasks.get(task)
        if current is not None:
            self._tasks[current.id] = current.as_completed()
            self._write_snapshot()

    async def activate_task(self, task: TaskRef) -> None:
        await self._simulate_latency()
        current = task if isinstance(task, Task) else self._tasks.get(task)
        if current is not None:
            self._tasks[current.id] = current.as_active()
            self._write_snapshot()

    async def clear_completed_tasks(self) -> None:
        await self._simulate_latency()
        self._tasks = {tid: t for tid, t in self._tasks.items() if t.active}
        self._write_snapshot()

    async def delete_all_tasks(self) -> None:
        await self._simulate_latency()
        self._tasks.clear()
        self._write_snapshot()

    async def delete_task(self, task_id: str) -> None:
        await self._simulate_latency()
        self._tasks.pop(task_id, None)
        self._write_snapshot()
