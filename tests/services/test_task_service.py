"""Unit tests for TaskService.

Most tests run against a real TaskCacheCoordinator over recording stores;
a few use an AsyncMock store to check the calls made.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from todo_mvp.exceptions import EmptyTaskError, TaskNotFoundError
from todo_mvp.models import Task, TaskFilterType, TaskStatistics
from todo_mvp.services.task_service import TaskService

ACTIVE = Task(id="a", title="Active task")
DONE = Task(id="d", title="Done task", completed=True)


@pytest.fixture()
def service(coordinator) -> TaskService:
    return TaskService(coordinator)


@pytest.fixture()
def mock_store():
    store = MagicMock()
    store.list_tasks = AsyncMock(return_value=[])
    store.get_task = AsyncMock(return_value=None)
    store.save_task = AsyncMock()
    store.complete_task = AsyncMock()
    store.activate_task = AsyncMock()
    store.clear_completed_tasks = AsyncMock()
    store.delete_all_tasks = AsyncMock()
    store.delete_task = AsyncMock()
    store.refresh_tasks = AsyncMock()
    return store


# ---------------------------------------------------------------------------
# load_tasks
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "filter_type, expected",
    [
        (TaskFilterType.ALL, ["a", "d"]),
        (TaskFilterType.ACTIVE, ["a"]),
        (TaskFilterType.COMPLETED, ["d"]),
    ],
)
async def test_load_tasks_filters(service, local_store, filter_type, expected):
    local_store.seed(ACTIVE, DONE)
    tasks = await service.load_tasks(filter_type)
    assert [t.id for t in tasks] == expected


@pytest.mark.asyncio
async def test_load_tasks_force_update_refreshes_first(mock_store):
    service = TaskService(mock_store)
    await service.load_tasks(force_update=True)
    mock_store.refresh_tasks.assert_awaited_once()
    mock_store.list_tasks.assert_awaited_once()


@pytest.mark.asyncio
async def test_load_tasks_without_force_does_not_refresh(mock_store):
    await TaskService(mock_store).load_tasks()
    mock_store.refresh_tasks.assert_not_awaited()


@pytest.mark.asyncio
async def test_force_update_reads_remote(service, local_store, remote_store):
    local_store.seed(ACTIVE)
    remote_store.seed(DONE)
    assert await service.load_tasks() == [ACTIVE]

    assert await service.load_tasks(force_update=True) == [DONE]


# ---------------------------------------------------------------------------
# get / add / update
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_task_missing_raises(service):
    with pytest.raises(TaskNotFoundError) as exc_info:
        await service.get_task("missing")
    assert exc_info.value.task_id == "missing"


@pytest.mark.asyncio
async def test_add_task_saves_to_both_stores(service, local_store, remote_store):
    task = await service.add_task("New", "Something")

    assert task.title == "New"
    assert task.completed is False
    assert local_store.contents == {task.id: task}
    assert remote_store.contents == {task.id: task}


@pytest.mark.asyncio
async def test_add_task_with_description_only(service):
    task = await service.add_task(None, "Only description")
    assert task.title_for_list == "Only description"


@pytest.mark.asyncio
@pytest.mark.parametrize("title, description", [(None, None), ("", "  ")])
async def test_add_empty_task_raises(service, local_store, title, description):
    with pytest.raises(EmptyTaskError):
        await service.add_task(title, description)
    assert local_store.contents == {}


@pytest.mark.asyncio
async def test_update_task_keeps_completion(service, local_store):
    local_store.seed(DONE)

    updated = await service.update_task("d", title="Renamed")

    assert updated.title == "Renamed"
    assert updated.completed is True
    assert local_store.contents["d"] == updated


@pytest.mark.asyncio
async def test_update_task_only_description(service, local_store):
    local_store.seed(ACTIVE)
    updated = await service.update_task("a", description="More detail")
    assert updated.title == "Active task"
    assert updated.description == "More detail"


@pytest.mark.asyncio
async def test_update_task_to_empty_raises(service, local_store):
    local_store.seed(Task(id="x", title="Only title"))
    with pytest.raises(EmptyTaskError):
        await service.update_task("x", title="")
    assert local_store.contents["x"].title == "Only title"


@pytest.mark.asyncio
async def test_update_missing_task_raises(service):
    with pytest.raises(TaskNotFoundError):
        await service.update_task("missing", title="x")


# ---------------------------------------------------------------------------
# complete / activate / delete / clear
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_complete_task(service, local_store, remote_store):
    local_store.seed(ACTIVE)

    result = await service.complete_task("a")

    assert result.completed is True
    assert local_store.contents["a"].completed is True
    assert remote_store.contents["a"].completed is True


@pytest.mark.asyncio
async def test_activate_task(service, local_store):
    local_store.seed(DONE)
    result = await service.activate_task("d")
    assert result.completed is False
    assert local_store.contents["d"].completed is False


@pytest.mark.asyncio
async def test_complete_missing_task_raises(service):
    with pytest.raises(TaskNotFoundError):
        await service.complete_task("missing")


@pytest.mark.asyncio
async def test_delete_task(service, local_store, remote_store):
    local_store.seed(ACTIVE)
    remote_store.seed(ACTIVE)

    deleted = await service.delete_task("a")

    assert deleted == ACTIVE
    assert local_store.contents == {}
    assert remote_store.contents == {}


@pytest.mark.asyncio
async def test_delete_missing_task_raises(service):
    with pytest.raises(TaskNotFoundError):
        await service.delete_task("missing")


@pytest.mark.asyncio
async def test_clear_completed_returns_count(service, local_store):
    local_store.seed(ACTIVE, DONE)

    assert await service.clear_completed_tasks() == 1
    assert await service.load_tasks() == [ACTIVE]


@pytest.mark.asyncio
async def test_delete_all(service, local_store, remote_store):
    local_store.seed(ACTIVE, DONE)
    remote_store.seed(ACTIVE)

    await service.delete_all_tasks()

    assert await service.load_tasks() == []
    assert local_store.contents == {}
    assert remote_store.contents == {}


# ---------------------------------------------------------------------------
# statistics
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_statistics(service, local_store):
    local_store.seed(ACTIVE, DONE, Task(id="e", title="Another", completed=True))
    assert await service.get_statistics() == TaskStatistics(active=1, completed=2)


@pytest.mark.asyncio
async def test_statistics_empty(service):
    stats = await service.get_statistics()
    assert stats.total == 0
