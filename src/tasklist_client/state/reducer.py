# src/tasklist_client/state/reducer.py

"""
Pure state transitions for the task list view.

`task_reducer(state, action)` never mutates its input and never raises for a
well-formed ViewState: unknown action types return the same state object.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..core.models import Task
from .actions import Action, ActionType


@dataclass(slots=True, frozen=True)
class ViewState:
    tasks: tuple[Task, ...] = ()
    loading: bool = False
    refreshing: bool = False
    error: str | None = None


INITIAL_STATE = ViewState()


def task_reducer(state: ViewState, action: Action) -> ViewState:
    kind = action.type
    payload = action.payload

    if kind == ActionType.SET_LOADING:
        # starting a load clears the previous error; finishing one keeps it
        if payload:
            return replace(state, loading=True, error=None)
        return replace(state, loading=False)

    if kind == ActionType.SET_REFRESHING:
        return replace(state, refreshing=bool(payload))

    if kind == ActionType.SET_ERROR:
        return replace(state, error=payload, loading=False, refreshing=False)

    if kind == ActionType.SET_TASKS:
        return ViewState(tasks=tuple(payload), loading=False, refreshing=False, error=None)

    if kind == ActionType.ADD_TASK:
        return replace(state, tasks=(payload, *state.tasks), loading=False, error=None)

    if kind == ActionType.UPDATE_TASK:
        tasks = tuple(payload if t.id == payload.id else t for t in state.tasks)
        return replace(state, tasks=tasks, loading=False, error=None)

    if kind == ActionType.COMPLETE_TASK:
        tasks = tuple(replace(t, completed=True) if t.id == payload else t for t in state.tasks)
        return replace(state, tasks=tasks, loading=False, error=None)

    if kind == ActionType.DELETE_TASK:
        tasks = tuple(t for t in state.tasks if t.id != payload)
        return replace(state, tasks=tasks, loading=False, error=None)

    if kind == ActionType.RESET_STATE:
        return INITIAL_STATE

    return state
