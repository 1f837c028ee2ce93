# src/tasklist_client/state/store.py

from __future__ import annotations

"""
Task list store.

The only object a front end talks to. It:
- owns the ViewState and replaces it atomically on every dispatch,
- turns UI intents (fetch/create/complete/refresh/clear) into repository calls,
- converts every repository failure into a SET_ERROR dispatch.

Concurrent operations are not serialized. Each repository-bound operation takes
a ticket from a request counter. When a list result arrives:
- if a newer list request (fetch/refresh) was issued, the result is dropped;
- otherwise it is applied, with any successful create/complete that was issued
  after it replayed on top, so a slow list never erases a fresher mutation.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TypeVar

from ..core.errors import HttpError, as_http_error
from ..core.models import CreateTaskRequest, Task
from ..core.ports import TaskRepo
from ..core.result import Err, Ok, Result
from . import actions
from .actions import Action, ActionType
from .reducer import INITIAL_STATE, ViewState, task_reducer

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[ViewState], None]

FETCH_FAILED = "Failed to fetch tasks"
CREATE_FAILED = "Failed to create task"
COMPLETE_FAILED = "Failed to complete task"
REFRESH_FAILED = "Failed to refresh tasks"


def _error_message(error: HttpError, fallback: str) -> str:
    msg = (error.message or "").strip()
    return msg or fallback


def _replay(tasks: list[Task], mutations: list[Action]) -> list[Task]:
    """Apply successful ADD_TASK / COMPLETE_TASK actions to a fetched list (errors are skipped)."""
    out = list(tasks)
    for action in mutations:
        if action.type == ActionType.ADD_TASK:
            # the list may already contain it if the server saw the create first
            if all(t.id != action.payload.id for t in out):
                out.insert(0, action.payload)
        elif action.type == ActionType.COMPLETE_TASK:
            out = [replace(t, completed=True) if t.id == action.payload else t for t in out]
    return out


class TaskListStore:
    def __init__(self, repository: TaskRepo, initial_state: ViewState = INITIAL_STATE) -> None:
        self._repo = repository
        self._state = initial_state
        self._listeners: list[Listener] = []

        self._last_ticket = 0
        self._last_list_ticket = 0
        self._in_flight = 0
        # tickets of list requests still waiting on the repository
        self._lists_in_flight: set[int] = set()
        # (ticket, action) for create/complete outcomes a pending list has not seen yet
        self._journal: list[tuple[int, Action]] = []

    # ---- state ----

    @property
    def state(self) -> ViewState:
        return self._state

    def dispatch(self, action: Action) -> ViewState:
        self._state = task_reducer(self._state, action)
        logger.debug("dispatch %s -> loading=%s refreshing=%s error=%r tasks=%d",
                     action.type, self._state.loading, self._state.refreshing,
                     self._state.error, len(self._state.tasks))

        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener failed.")
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(state)` after every dispatch. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ---- request bookkeeping ----

    def _issue_ticket(self, *, is_list: bool = False) -> int:
        self._last_ticket += 1
        self._in_flight += 1
        if is_list:
            self._last_list_ticket = self._last_ticket
            self._lists_in_flight.add(self._last_ticket)
        return self._last_ticket

    def _record_outcome(self, ticket: int, action: Action) -> None:
        if self._lists_in_flight:
            self._journal.append((ticket, action))

    def _prune_journal(self) -> None:
        if not self._lists_in_flight:
            self._journal.clear()
            return
        oldest = min(self._lists_in_flight)
        self._journal = [(t, a) for t, a in self._journal if t > oldest]

    async def _call(self, ticket: int, call: Callable[[], Awaitable[Result[T]]]) -> Result[T]:
        """Run one repository call; exceptions become Err so nothing escapes unobserved."""
        try:
            return await call()
        except Exception as e:
            logger.exception("Repository call raised (ticket=%s)", ticket)
            return Err(as_http_error(e))
        finally:
            self._in_flight -= 1

    # ---- operations ----

    async def fetch_tasks(self) -> None:
        self.dispatch(actions.set_loading(True))
        ticket = self._issue_ticket(is_list=True)
        result = await self._call(ticket, self._repo.get_tasks)
        self._settle_list(result, ticket, refreshing=False)

    async def refresh_tasks(self) -> None:
        self.dispatch(actions.set_refreshing(True))
        ticket = self._issue_ticket(is_list=True)
        result = await self._call(ticket, self._repo.get_tasks)
        self._settle_list(result, ticket, refreshing=True)

    async def create_task(self, request: CreateTaskRequest) -> Task:
        """
        Create a task and prepend it to the list.

        On failure the error is put into state AND raised, so a form can keep
        its input instead of assuming success.
        """
        self.dispatch(actions.set_loading(True))
        ticket = self._issue_ticket()
        result = await self._call(ticket, lambda: self._repo.create_task(request))

        if isinstance(result, Ok):
            logger.info("Created task id=%s", result.value.id)
            action = actions.add_task(result.value)
            self._record_outcome(ticket, action)
            self.dispatch(action)
            return result.value

        logger.info("Create task failed: %r", result.error)
        self._fail(ticket, _error_message(result.error, CREATE_FAILED))
        raise result.error

    async def complete_task(self, task_id: int) -> None:
        self.dispatch(actions.set_loading(True))
        ticket = self._issue_ticket()
        result = await self._call(ticket, lambda: self._repo.complete_task(task_id))

        if isinstance(result, Ok):
            logger.info("Completed task id=%s", task_id)
            # the locally known id is authoritative for the list
            action = actions.complete_task(task_id)
            self._record_outcome(ticket, action)
            self.dispatch(action)
            return

        logger.info("Complete task id=%s failed: %r", task_id, result.error)
        self._fail(ticket, _error_message(result.error, COMPLETE_FAILED))

    def clear_error(self) -> None:
        # an error the user dismissed must not come back with a late list
        self._journal = [(t, a) for t, a in self._journal if a.type != ActionType.SET_ERROR]
        self.dispatch(actions.set_error(None))

    # ---- helpers ----

    def _fail(self, ticket: int, message: str) -> None:
        action = actions.set_error(message)
        self._record_outcome(ticket, action)
        self.dispatch(action)

    def _settle_list(self, result: Result[list[Task]], ticket: int, *, refreshing: bool) -> None:
        self._lists_in_flight.discard(ticket)
        try:
            self._apply_list(result, ticket, refreshing=refreshing)
        finally:
            self._prune_journal()

    def _apply_list(self, result: Result[list[Task]], ticket: int, *, refreshing: bool) -> None:
        fallback = REFRESH_FAILED if refreshing else FETCH_FAILED

        if isinstance(result, Err):
            logger.info("%s: %r", fallback, result.error)
            self.dispatch(actions.set_error(_error_message(result.error, fallback)))
            return

        if ticket < self._last_list_ticket:
            logger.debug(
                "Dropping stale task list (ticket=%s, latest list=%s, in_flight=%s)",
                ticket,
                self._last_list_ticket,
                self._in_flight,
            )
            if refreshing:
                self.dispatch(actions.set_refreshing(False))
            elif self._in_flight == 0:
                self.dispatch(actions.set_loading(False))
            return

        newer = [a for t, a in self._journal if t > ticket]
        tasks = _replay(result.value, newer)
        logger.info(
            "Loaded %d tasks (refresh=%s, replayed=%d)", len(tasks), refreshing, len(newer)
        )
        self.dispatch(actions.set_tasks(tasks))

        # SET_TASKS clears the error; a newer failure must stay visible
        if newer and newer[-1].type == ActionType.SET_ERROR:
            self.dispatch(newer[-1])
