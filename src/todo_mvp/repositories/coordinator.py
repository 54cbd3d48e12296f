"""Task cache coordinator.

Loads tasks from a local and a remote store into an in-memory cache.

For simplicity this implements a dumb synchronisation between locally
persisted data and data obtained from the remote store: the remote store is
only consulted when the local store is empty or when the cache has been
marked dirty by ``refresh_tasks()``.

The coordinator is not thread-safe. Callers must serialize access to a given
instance (one event loop, one pending call at a time).
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from todo_mvp.exceptions import PreconditionError
from todo_mvp.models import Task
from todo_mvp.repositories.repository import TaskRef, TaskStore

logger = logging.getLogger(__name__)


def _log_write_through_failure(save: asyncio.Future) -> None:
    # Retrieves the exception even when the awaiting caller was cancelled.
    if save.cancelled():
        return
    error = save.exception()
    if error is not None:
        logger.warning("write-through to local store failed: %r", error)


class CacheState(str, Enum):
    """Lifecycle of the coordinator's cache.

    UNINITIALIZED: no full listing has been loaded yet. Entries memoized by
        ``get_task``/``save_task`` may exist but are never served as a listing.
    CLEAN: the cache mirrors the complete, unfiltered task set.
    DIRTY: the cache is stale and the next listing must come from remote.
    """

    UNINITIALIZED = "uninitialized"
    CLEAN = "clean"
    DIRTY = "dirty"


class TaskCacheCoordinator(TaskStore):
    """Two-tier task store: cache first, then local, then remote.

    Writes go to the remote store, then the local store, then the cache.
    There is no rollback; if one store write fails the stores diverge and
    the error propagates to the caller.
    """

    def __init__(self, remote: TaskStore, local: TaskStore):
        """Initialize the coordinator.

        Args:
            remote: Remote task store (source of truth on refresh)
            local: Local persistent task store
        """
        self._remote = remote
        self._local = local
        self._state = CacheState.UNINITIALIZED
        self._cache: dict[str, Task] | None = None

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def cached_tasks(self) -> dict[str, Task] | None:
        """Snapshot of the cache mapping, or None if it was never created."""
        if self._cache is None:
            return None
        return dict(self._cache)

    def _ensure_cache(self) -> dict[str, Task]:
        if self._cache is None:
            self._cache = {}
        return self._cache

    def _require_cache(self, operation: str) -> dict[str, Task]:
        if self._cache is None:
            raise PreconditionError(
                f"{operation}() called before the task cache was populated; "
                "call list_tasks() or get_task() first"
            )
        return self._cache

    async def list_tasks(self) -> list[Task]:
        if self._state is CacheState.CLEAN and self._cache is not None:
            logger.debug("list_tasks served from cache (%d tasks)", len(self._cache))
            return list(self._cache.values())

        if self._state is CacheState.DIRTY:
            logger.debug("cache dirty, reloading tasks from remote")
            return await self._load_remote_tasks(rebuild=True)

        local_tasks = await self._local.list_tasks()
        cache = self._ensure_cache()
        for task in local_tasks:
            cache[task.id] = task

        if local_tasks:
            self._state = CacheState.CLEAN
            logger.debug("loaded %d tasks from local store", len(local_tasks))
            return local_tasks

        logger.debug("local store empty, falling back to remote")
        return await self._load_remote_tasks(rebuild=False)

    async def _load_remote_tasks(self, *, rebuild: bool) -> list[Task]:
        remote_tasks = await self._remote.list_tasks()

        # The cache is only swapped once the remote read has succeeded.
        cache = {} if rebuild else self._ensure_cache()
        for task in remote_tasks:
            cache[task.id] = task
        self._cache = cache
        self._state = CacheState.CLEAN
        logger.debug("loaded %d tasks from remote store", len(remote_tasks))

        await self._write_through(remote_tasks)
        return remote_tasks

    async def _write_through(self, tasks: list[Task]) -> None:
        """Persist remote results locally; completes even if the caller is cancelled."""
        if not tasks:
            return
        save = asyncio.ensure_future(self._save_locally(tasks))
        save.add_done_callback(_log_write_through_failure)
        await asyncio.shield(save)

    async def _save_locally(self, tasks: list[Task]) -> None:
        for task in tasks:
            await self._local.save_task(task)

    async def get_task(self, task_id: str) -> Task | None:
        if self._cache is not None and task_id in self._cache:
            return self._cache[task_id]

        self._ensure_cache()

        local_task = await self._local.get_task(task_id)
        if local_task is not None:
            self._ensure_cache()[task_id] = local_task
            return local_task

        remote_task = await self._remote.get_task(task_id)
        if remote_task is not None:
            self._ensure_cache()[remote_task.id] = remote_task
            await self._write_through([remote_task])
        else:
            logger.debug("task %s found in neither store", task_id)
        return remote_task

    async def save_task(self, task: Task) -> None:
        await self._remote.save_task(task)
        await self._local.save_task(task)
        self._ensure_cache()[task.id] = task

    async def complete_task(self, task: TaskRef) -> None:
        if isinstance(task, str):
            cached = self._require_cache("complete_task").get(task)
            if cached is None:
                logger.debug("complete_task: %s not cached, ignoring", task)
                return
            task = cached

        await self._remote.complete_task(task)
        await self._local.complete_task(task)
        self._ensure_cache()[task.id] = task.as_completed()

    async def activate_task(self, task: TaskRef) -> None:
        if isinstance(task, str):
            cached = self._require_cache("activate_task").get(task)
            if cached is None:
                logger.debug("activate_task: %s not cached, ignoring", task)
                return
            task = cached

        await self._remote.activate_task(task)
        await self._local.activate_task(task)
        self._ensure_cache()[task.id] = task.as_active()

    async def clear_completed_tasks(self) -> None:
        await self._remote.clear_completed_tasks()
        await self._local.clear_completed_tasks()

        cache = self._ensure_cache()
        for task_id in [tid for tid, t in cache.items() if t.completed]:
            del cache[task_id]

    async def refresh_tasks(self) -> None:
        self._state = CacheState.DIRTY

    async def delete_all_tasks(self) -> None:
        await self._remote.delete_all_tasks()
        await self._local.delete_all_tasks()

        self._ensure_cache().clear()
        if self._state is CacheState.UNINITIALIZED:
            # Both stores are now empty, so the empty cache is authoritative.
            self._state = CacheState.CLEAN

    async def delete_task(self, task_id: str) -> None:
        self._require_cache("delete_task")
        await self._remote.delete_task(task_id)
        await self._local.delete_task(task_id)
        self._ensure_cache().pop(task_id, None)
