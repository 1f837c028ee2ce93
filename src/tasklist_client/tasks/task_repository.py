# src/tasklist_client/tasks/task_repository.py

from __future__ import annotations

import logging
from typing import Any

from ..core.errors import NETWORK_ERROR_STATUS, HttpError
from ..core.models import CreateTaskRequest, Task
from ..core.ports import HttpClient
from ..core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

TASKS_PATH = "/tasks"


def _task_path(task_id: int) -> str:
    return f"{TASKS_PATH}/{int(task_id)}"


def _malformed(what: str, exc: Exception) -> Err:
    logger.warning("Malformed %s payload: %s", what, exc)
    return Err(HttpError(f"Malformed {what} payload from server", NETWORK_ERROR_STATUS))


class HttpTaskRepository:
    """
    TaskRepo backed by the REST `tasks` resource.

    Nothing is validated or retried here; HTTP failures come back unchanged as Err.

    | op       | request                    | response        |
    |----------|----------------------------|-----------------|
    | list     | GET    /tasks              | [Task, ...]     |
    | create   | POST   /tasks              | Task            |
    | complete | PUT    /tasks/{id}/complete | Task           |
    | update   | PATCH  /tasks/{id}         | Task            |
    | delete   | DELETE /tasks/{id}         | empty           |
    """

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    async def get_tasks(self) -> Result[list[Task]]:
        result = await self._http.get(TASKS_PATH)
        if isinstance(result, Err):
            return result

        payload = result.value
        if not isinstance(payload, list):
            return _malformed("task list", TypeError(f"expected array, got {type(payload).__name__}"))
        try:
            return Ok([Task.from_api(item) for item in payload])
        except (TypeError, ValueError) as e:
            return _malformed("task list", e)

    async def create_task(self, request: CreateTaskRequest) -> Result[Task]:
        result = await self._http.post(TASKS_PATH, request.to_api())
        return self._to_task(result)

    async def complete_task(self, task_id: int) -> Result[Task]:
        result = await self._http.put(f"{_task_path(task_id)}/complete")
        return self._to_task(result)

    async def update_task(self, task_id: int, fields: dict[str, Any]) -> Result[Task]:
        # id is server-owned; never send it in a partial update
        body = {k: v for k, v in fields.items() if k != "id"}
        result = await self._http.patch(_task_path(task_id), body)
        return self._to_task(result)

    async def delete_task(self, task_id: int) -> Result[None]:
        result = await self._http.delete(_task_path(task_id))
        if isinstance(result, Err):
            return result
        return Ok(None)

    @staticmethod
    def _to_task(result: Result[Any]) -> Result[Task]:
        if isinstance(result, Err):
            return result
        try:
            return Ok(Task.from_api(result.value))
        except (TypeError, ValueError) as e:
            return _malformed("task", e)
