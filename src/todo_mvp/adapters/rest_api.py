"""REST API adapter - TaskStore implementation backed by the remote task API."""

from __future__ import annotations

import httpx

from todo_mvp.api.client import APIClient
from todo_mvp.models import Task
from todo_mvp.repositories import TaskRef, TaskStore, task_id_of


class RestApiTaskStore(TaskStore):
    """Task store talking JSON to the remote task API.

    Endpoints (relative to the configured base URL):
        GET    /tasks                   list ({"tasks": [...]} or bare list)
        GET    /tasks/{id}              detail, 404 when absent
        PUT    /tasks/{id}              insert or replace
        POST   /tasks/{id}/complete
        POST   /tasks/{id}/activate
        POST   /tasks/clear-completed
        DELETE /tasks                   delete everything
        DELETE /tasks/{id}
    """

    def __init__(self, client: APIClient | None = None):
        self._client = client

    @property
    def client(self) -> APIClient:
        """Get or create the API client."""
        if self._client is None:
            self._client = APIClient()
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def list_tasks(self) -> list[Task]:
        response = await self.client.get("/tasks")
        result = response.json()
        tasks_data = result.get("tasks", []) if isinstance(result, dict) else result
        return [Task.model_validate(task_dict) for task_dict in tasks_data]

    async def get_task(self, task_id: str) -> Task | None:
        try:
            response = await self.client.get(f"/tasks/{task_id}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise
        return Task.model_validate(response.json())

    async def save_task(self, task: Task) -> None:
        await self.client.put(f"/tasks/{task.id}", json=task.model_dump())

    async def complete_task(self, task: TaskRef) -> None:
        await self.client.post(f"/tasks/{task_id_of(task)}/complete")

    async def activate_task(self, task: TaskRef) -> None:
        await self.client.post(f"/tasks/{task_id_of(task)}/activate")

    async def clear_completed_tasks(self) -> None:
        await self.client.post("/tasks/clear-completed")

    async def delete_all_tasks(self) -> None:
        await self.client.delete("/tasks")

    async def delete_task(self, task_id: str) -> None:
        await self.client.delete(f"/tasks/{task_id}")
