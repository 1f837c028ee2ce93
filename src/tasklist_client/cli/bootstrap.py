# src/tasklist_client/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings once,
- ensures the local (gitignored) data directory exists,
- constructs the HTTP client, repository, validator and store exactly once
  and wires them together explicitly.
"""

from __future__ import annotations

import logging

import httpx

from ..config import Settings, get_settings
from ..core.state import AppState
from ..core.validation import TaskValidator
from ..net.http_client import AsyncHttpClient
from ..state.store import TaskListStore
from ..tasks.task_repository import HttpTaskRepository

logger = logging.getLogger(__name__)


def create_app_state(
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the HTTP transport) injectable makes the app easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    http = AsyncHttpClient(
        settings.api_base_url,
        timeout_ms=settings.http_timeout_ms,
        default_headers=settings.extra_headers,
        transport=transport,
    )
    if settings.api_token:
        http.set_auth_token(settings.api_token)

    repository = HttpTaskRepository(http)
    store = TaskListStore(repository)

    logger.info(
        "Task API: base_url=%s timeout_ms=%s auth=%s",
        http.base_url,
        settings.http_timeout_ms,
        "bearer" if settings.api_token else "none",
    )

    return AppState(
        settings=settings,
        http=http,
        repository=repository,
        store=store,
        validator=TaskValidator(),
    )


async def shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.http.aclose()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)
