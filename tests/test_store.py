# tests/test_store.py

from __future__ import annotations

import asyncio

import pytest

from tasklist_client.core.errors import HttpError
from tasklist_client.core.models import CreateTaskRequest, Task
from tasklist_client.state import actions
from tasklist_client.state.reducer import INITIAL_STATE, ViewState
from tasklist_client.state.store import TaskListStore

from .fakes import FakeTaskRepo


@pytest.mark.asyncio
async def test_fetch_tasks_loads_repository_list() -> None:
    task = Task(id=1, title="A", description="d", completed=False)
    store = TaskListStore(FakeTaskRepo([task]))

    await store.fetch_tasks()

    assert store.state == ViewState(tasks=(task,), loading=False, refreshing=False, error=None)


@pytest.mark.asyncio
async def test_fetch_dispatches_loading_then_tasks(store: TaskListStore) -> None:
    seen: list[ViewState] = []
    store.subscribe(seen.append)

    await store.fetch_tasks()

    assert [s.loading for s in seen] == [True, False]
    assert len(seen[-1].tasks) == 2


@pytest.mark.asyncio
async def test_fetch_failure_sets_error(store: TaskListStore, repo: FakeTaskRepo) -> None:
    repo.fail_with = HttpError("Server down", 500)

    await store.fetch_tasks()

    assert store.state.error == "Server down"
    assert store.state.loading is False


@pytest.mark.asyncio
async def test_fetch_failure_without_message_uses_fallback(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    repo.fail_with = HttpError("", 0)

    await store.fetch_tasks()

    assert store.state.error == "Failed to fetch tasks"


@pytest.mark.asyncio
async def test_repository_exception_is_normalized(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    repo.raise_with = RuntimeError("socket exploded")

    await store.fetch_tasks()

    assert store.state.error == "socket exploded"


@pytest.mark.asyncio
async def test_create_task_prepends(store: TaskListStore) -> None:
    await store.fetch_tasks()

    created = await store.create_task(CreateTaskRequest(title="New one", description="fresh"))

    assert store.state.tasks[0] == created
    assert [t.id for t in store.state.tasks] == [3, 1, 2]
    assert store.state.loading is False
    assert store.state.error is None


@pytest.mark.asyncio
async def test_create_task_failure_sets_error_and_raises(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    repo.fail_with = HttpError("Server down", 500)

    with pytest.raises(HttpError) as exc_info:
        await store.create_task(CreateTaskRequest(title="Buy milk", description="2%"))

    assert exc_info.value.status_code == 500
    assert store.state.error == "Server down"
    assert store.state.loading is False
    assert store.state.tasks == ()


@pytest.mark.asyncio
async def test_create_task_unexpected_exception_reraised_as_http_error(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    repo.raise_with = ValueError("")

    with pytest.raises(HttpError) as exc_info:
        await store.create_task(CreateTaskRequest(title="Buy milk"))

    assert exc_info.value.status_code == 0
    assert store.state.error == "An unexpected error occurred"


@pytest.mark.asyncio
async def test_complete_task_marks_local_task(store: TaskListStore, repo: FakeTaskRepo) -> None:
    await store.fetch_tasks()

    await store.complete_task(1)

    assert store.state.tasks[0].completed is True
    assert store.state.tasks[0].title == "Buy milk"
    assert repo.calls[-1] == ("complete_task", 1)


@pytest.mark.asyncio
async def test_complete_task_failure_sets_error_without_raising(store: TaskListStore) -> None:
    await store.fetch_tasks()

    await store.complete_task(404)

    assert store.state.error == "not found"
    assert all(t.id != 404 for t in store.state.tasks)


@pytest.mark.asyncio
async def test_refresh_toggles_refreshing_not_loading(store: TaskListStore) -> None:
    seen: list[ViewState] = []
    store.subscribe(seen.append)

    await store.refresh_tasks()

    assert [(s.loading, s.refreshing) for s in seen] == [(False, True), (False, False)]
    assert len(store.state.tasks) == 2


@pytest.mark.asyncio
async def test_refresh_failure_uses_refresh_fallback(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    repo.fail_with = HttpError("   ", 503)

    await store.refresh_tasks()

    assert store.state.error == "Failed to refresh tasks"
    assert store.state.refreshing is False


@pytest.mark.asyncio
async def test_clear_error(store: TaskListStore, repo: FakeTaskRepo) -> None:
    repo.fail_with = HttpError("nope", 500)
    await store.fetch_tasks()

    store.clear_error()

    assert store.state.error is None


def test_dispatch_and_reset(store: TaskListStore) -> None:
    store.dispatch(actions.set_error("x"))
    store.dispatch(actions.reset_state())
    assert store.state == INITIAL_STATE


def test_unsubscribe_and_failing_listener(store: TaskListStore) -> None:
    calls: list[ViewState] = []

    def broken(state: ViewState) -> None:
        raise RuntimeError("render failed")

    store.subscribe(broken)
    unsubscribe = store.subscribe(calls.append)

    store.dispatch(actions.set_loading(True))
    unsubscribe()
    store.dispatch(actions.set_loading(False))

    assert len(calls) == 1
    assert store.state.loading is False


@pytest.mark.asyncio
async def test_late_fetch_keeps_task_created_meanwhile(
    store: TaskListStore, repo: FakeTaskRepo, sample_tasks: list[Task]
) -> None:
    gate = asyncio.Event()
    repo.gates["get_tasks"] = gate

    fetch = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)  # fetch is now waiting on the repository

    created = await store.create_task(CreateTaskRequest(title="Fresh task"))
    assert store.state.tasks == (created,)

    gate.set()
    await fetch

    # the server list predates the create; the created task is kept on top
    assert store.state.tasks == (created, *sample_tasks)
    assert store.state.loading is False
    assert store.state.error is None


@pytest.mark.asyncio
async def test_late_fetch_after_failed_create_shows_list_and_error(
    store: TaskListStore, repo: FakeTaskRepo, sample_tasks: list[Task]
) -> None:
    gate = asyncio.Event()
    repo.gates["get_tasks"] = gate
    repo.failures["create_task"] = HttpError("Server down", 500)

    fetch = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)

    with pytest.raises(HttpError):
        await store.create_task(CreateTaskRequest(title="Buy milk", description="2%"))

    gate.set()
    await fetch

    assert store.state.tasks == tuple(sample_tasks)
    assert store.state.error == "Server down"
    assert store.state.loading is False


@pytest.mark.asyncio
async def test_dismissed_error_does_not_return_with_late_fetch(
    store: TaskListStore, repo: FakeTaskRepo, sample_tasks: list[Task]
) -> None:
    gate = asyncio.Event()
    repo.gates["get_tasks"] = gate
    repo.failures["complete_task"] = HttpError("Server down", 500)

    fetch = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)

    await store.complete_task(1)
    store.clear_error()

    gate.set()
    await fetch

    assert store.state.tasks == tuple(sample_tasks)
    assert store.state.error is None


@pytest.mark.asyncio
async def test_late_fetch_after_complete_on_empty_list(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    gate = asyncio.Event()
    repo.gates["get_tasks"] = gate

    fetch = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)

    # nothing is loaded yet, so locally this changes no task
    await store.complete_task(1)
    assert store.state.tasks == ()

    gate.set()
    await fetch

    assert [t.id for t in store.state.tasks] == [1, 2]
    assert store.state.tasks[0].completed is True
    assert store.state.error is None


@pytest.mark.asyncio
async def test_late_refresh_applies_list_and_clears_refreshing(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    gate = asyncio.Event()
    repo.gates["get_tasks"] = gate

    refresh = asyncio.create_task(store.refresh_tasks())
    await asyncio.sleep(0)
    assert store.state.refreshing is True

    await store.complete_task(1)

    gate.set()
    await refresh

    assert store.state.refreshing is False
    assert [(t.id, t.completed) for t in store.state.tasks] == [(1, True), (2, True)]


@pytest.mark.asyncio
async def test_older_of_two_fetches_is_dropped(store: TaskListStore, repo: FakeTaskRepo) -> None:
    gate = asyncio.Event()
    repo.gates["get_tasks"] = gate

    first = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)
    # the second request sees a newer server list
    repo.tasks = repo.tasks[:1]
    second = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)

    gate.set()
    await asyncio.gather(first, second)

    assert [t.id for t in store.state.tasks] == [1]
    assert store.state.loading is False


@pytest.mark.asyncio
async def test_older_refresh_dropped_still_clears_refreshing(
    store: TaskListStore, repo: FakeTaskRepo
) -> None:
    gate = asyncio.Event()
    repo.gates["get_tasks"] = gate

    refresh = asyncio.create_task(store.refresh_tasks())
    await asyncio.sleep(0)
    repo.tasks = []
    fetch = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)

    gate.set()
    await asyncio.gather(refresh, fetch)

    assert store.state.tasks == ()
    assert store.state.refreshing is False
    assert store.state.loading is False
