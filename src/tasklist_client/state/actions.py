# src/tasklist_client/state/actions.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.models import Task


class ActionType(StrEnum):
    SET_LOADING = "SET_LOADING"
    SET_REFRESHING = "SET_REFRESHING"
    SET_ERROR = "SET_ERROR"
    SET_TASKS = "SET_TASKS"
    ADD_TASK = "ADD_TASK"
    UPDATE_TASK = "UPDATE_TASK"
    COMPLETE_TASK = "COMPLETE_TASK"
    DELETE_TASK = "DELETE_TASK"
    RESET_STATE = "RESET_STATE"


@dataclass(slots=True, frozen=True)
class Action:
    """
    A state transition request.

    `type` is usually an ActionType; any other value is accepted and ignored
    by the reducer.
    """

    type: ActionType | str
    payload: Any = None


def set_loading(loading: bool) -> Action:
    return Action(ActionType.SET_LOADING, bool(loading))


def set_refreshing(refreshing: bool) -> Action:
    return Action(ActionType.SET_REFRESHING, bool(refreshing))


def set_error(error: str | None) -> Action:
    return Action(ActionType.SET_ERROR, error)


def set_tasks(tasks: list[Task] | tuple[Task, ...]) -> Action:
    return Action(ActionType.SET_TASKS, tuple(tasks))


def add_task(task: Task) -> Action:
    return Action(ActionType.ADD_TASK, task)


def update_task(task: Task) -> Action:
    return Action(ActionType.UPDATE_TASK, task)


def complete_task(task_id: int) -> Action:
    return Action(ActionType.COMPLETE_TASK, task_id)


def delete_task(task_id: int) -> Action:
    return Action(ActionType.DELETE_TASK, task_id)


def reset_state() -> Action:
    return Action(ActionType.RESET_STATE)
