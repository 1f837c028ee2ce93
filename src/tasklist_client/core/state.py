# src/tasklist_client/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..net.http_client import AsyncHttpClient
from ..state.store import TaskListStore
from .models import CreateTaskRequest
from .ports import TaskRepo, Validator


@dataclass
class AppState:
    # Built once by cli.bootstrap and passed explicitly; nothing here is global.
    settings: Settings

    http: AsyncHttpClient
    repository: TaskRepo
    store: TaskListStore
    validator: Validator

    # Last create request that failed, kept so the user can resubmit it.
    draft: CreateTaskRequest | None = None
