"""Composition root: builds stores and the task cache coordinator.

One StorageContext is created per process (or per test) from the app
configuration and passed to the services that need it.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from todo_mvp.adapters import InMemoryTaskStore, RestApiTaskStore, SqliteTaskStore
from todo_mvp.adapters.memory import default_snapshot_path
from todo_mvp.api.client import APIClient
from todo_mvp.models import AppConfig
from todo_mvp.repositories import TaskCacheCoordinator, TaskStore
from todo_mvp.services.config_service import get_config_service
from todo_mvp.services.task_service import TaskService

logger = logging.getLogger(__name__)


def build_remote_store(config: AppConfig) -> TaskStore:
    """Create the remote store selected by ``remote.type``."""
    remote = config.remote
    if remote.type == "http":
        return RestApiTaskStore(APIClient(remote))
    path = remote.snapshot_path or default_snapshot_path()
    if remote.seed:
        return InMemoryTaskStore.with_seed_data(latency=remote.latency, path=path)
    return InMemoryTaskStore(latency=remote.latency, path=path)


@dataclass
class StorageContext:
    """Stores and coordinator wired together for one process."""

    local: SqliteTaskStore
    remote: TaskStore
    coordinator: TaskCacheCoordinator

    @classmethod
    def from_config(cls, config: AppConfig) -> StorageContext:
        local = SqliteTaskStore(db_path=config.local.db_path)
        remote = build_remote_store(config)
        logger.debug(
            "storage context: local=%s remote=%s",
            config.local.db_path or "<default>",
            config.remote.type,
        )
        return cls(
            local=local,
            remote=remote,
            coordinator=TaskCacheCoordinator(remote=remote, local=local),
        )

    @property
    def task_service(self) -> TaskService:
        return TaskService(self.coordinator)

    async def close(self) -> None:
        self.local.close()
        if isinstance(self.remote, RestApiTaskStore):
            await self.remote.close()


def get_storage_context() -> StorageContext:
    """Build a StorageContext from the current configuration."""
    return StorageContext.from_config(get_config_service().config)


@asynccontextmanager
async def task_service_scope() -> AsyncIterator[TaskService]:
    """Yield a TaskService for one command, closing its stores afterwards."""
    context = get_storage_context()
    try:
        yield context.task_service
    finally:
        await context.close()
