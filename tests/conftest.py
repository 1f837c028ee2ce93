# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from tasklist_client.config import Settings
from tasklist_client.core.models import Task
from tasklist_client.state.store import TaskListStore

from .fakes import FakeTaskRepo

BASE_URL = "http://api.test"


def json_response(status: int, body: Any) -> httpx.Response:
    return httpx.Response(
        status,
        content=json.dumps(body).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings built directly (not from env) so unit tests stay isolated
    and deterministic.
    """
    return Settings(
        app_name="tasklist-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_base_url=BASE_URL + "/",
        http_timeout_ms=1000,
        api_token=None,
        extra_headers={},
    )


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(id=1, title="Buy milk", description="2% please", completed=False),
        Task(id=2, title="Walk dog", description="", completed=True),
    ]


@pytest.fixture()
def repo(sample_tasks: list[Task]) -> FakeTaskRepo:
    return FakeTaskRepo(sample_tasks)


@pytest.fixture()
def store(repo: FakeTaskRepo) -> TaskListStore:
    return TaskListStore(repo)
