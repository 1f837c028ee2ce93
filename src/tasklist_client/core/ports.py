# src/tasklist_client/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the store.

The store depends on Protocols instead of concrete implementations, so the
HTTP transport and the repository can be swapped for fakes in tests.
"""

from typing import Any, Awaitable, Protocol

from .models import CreateTaskRequest, Task, ValidationResult
from .result import Result

JSONBody = Any
# Decoded JSON (dict / list / scalar). An empty dict means "success, no content".


class HttpClient(Protocol):
    """JSON-over-HTTP verbs relative to a fixed base URL. Failures come back as Err."""

    def get(self, path: str) -> Awaitable[Result[JSONBody]]: ...
    def post(self, path: str, body: JSONBody) -> Awaitable[Result[JSONBody]]: ...
    def put(self, path: str, body: JSONBody | None = None) -> Awaitable[Result[JSONBody]]: ...
    def patch(self, path: str, body: JSONBody) -> Awaitable[Result[JSONBody]]: ...
    def delete(self, path: str) -> Awaitable[Result[JSONBody]]: ...

    def set_auth_token(self, token: str) -> None: ...
    def clear_auth_token(self) -> None: ...


class TaskRepo(Protocol):
    """Domain operations on the remote `tasks` resource. No retries."""

    def get_tasks(self) -> Awaitable[Result[list[Task]]]: ...
    def create_task(self, request: CreateTaskRequest) -> Awaitable[Result[Task]]: ...
    def complete_task(self, task_id: int) -> Awaitable[Result[Task]]: ...
    def update_task(self, task_id: int, fields: dict[str, Any]) -> Awaitable[Result[Task]]: ...
    def delete_task(self, task_id: int) -> Awaitable[Result[None]]: ...


class Validator(Protocol):
    def validate_title(self, title: str) -> ValidationResult: ...
    def validate_description(self, description: str) -> ValidationResult: ...
    def validate_task(self, request: CreateTaskRequest) -> ValidationResult: ...
