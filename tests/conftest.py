"""Shared test fixtures and configuration.

Provides recording task stores and isolates tests from the real
config/log/data directories.
"""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterable
from unittest.mock import patch

import pytest

from todo_mvp.adapters.memory import InMemoryTaskStore
from todo_mvp.models import Task
from todo_mvp.repositories import TaskCacheCoordinator


class RecordingTaskStore(InMemoryTaskStore):
    """In-memory store that records the name of every call made on it."""

    def __init__(self, tasks: Iterable[Task] = ()):
        super().__init__(tasks)
        self.calls: list[str] = []

    def seed(self, *tasks: Task) -> None:
        """Put tasks into the store without recording a call."""
        for task in tasks:
            self._tasks[task.id] = task

    @property
    def contents(self) -> dict[str, Task]:
        return dict(self._tasks)

    def reset_calls(self) -> None:
        self.calls.clear()

    async def list_tasks(self):
        self.calls.append("list_tasks")
        return await super().list_tasks()

    async def get_task(self, task_id):
        self.calls.append("get_task")
        return await super().get_task(task_id)

    async def save_task(self, task):
        self.calls.append("save_task")
        await super().save_task(task)

    async def complete_task(self, task):
        self.calls.append("complete_task")
        await super().complete_task(task)

    async def activate_task(self, task):
        self.calls.append("activate_task")
        await super().activate_task(task)

    async def clear_completed_tasks(self):
        self.calls.append("clear_completed_tasks")
        await super().clear_completed_tasks()

    async def delete_all_tasks(self):
        self.calls.append("delete_all_tasks")
        await super().delete_all_tasks()

    async def delete_task(self, task_id):
        self.calls.append("delete_task")
        await super().delete_task(task_id)


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def local_store() -> RecordingTaskStore:
    return RecordingTaskStore()


@pytest.fixture()
def remote_store() -> RecordingTaskStore:
    return RecordingTaskStore()


@pytest.fixture()
def coordinator(local_store, remote_store) -> TaskCacheCoordinator:
    return TaskCacheCoordinator(remote=remote_store, local=local_store)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _remove_file_handlers() -> None:
    logger = logging.getLogger("todo_mvp")
    for handler in list(logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path):
    """Send the application log to tmp_path and reset the logger between tests."""
    import todo_mvp.utils.logger as logger_mod

    logger_mod._logger = None
    _remove_file_handlers()
    with patch("todo_mvp.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    _remove_file_handlers()
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a ConfigService in tmp_path wired as the process-wide service.

    The local vault and the memory remote snapshot live in tmp_path; the
    remote starts empty.
    """
    from todo_mvp.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    svc = ConfigService(config_dir=tmp_path / "config")
    svc.set("local.db_path", str(tmp_path / "vault.db"))
    svc.set("remote.snapshot_path", str(tmp_path / "remote.json"))
    svc.set("remote.seed", False)
    with patch(
        "todo_mvp.services.context_manager.get_config_service", return_value=svc
    ), patch("todo_mvp.commands.config.get_config_service", return_value=svc), patch(
        "todo_mvp.main.get_config_service", return_value=svc
    ):
        yield svc
    get_config_service.cache_clear()
