# src/tasklist_client/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.errors import HttpError
from ..core.models import CreateTaskRequest, Task
from ..core.state import AppState
from ..state.reducer import ViewState

CommandHandler = Callable[[AppState, list[str], str], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]
        # raw argument text, for commands that need spaces (/add)
        raw = line[1:].strip()[len(parts[0]) :].strip()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args, raw)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    line = f"[{mark}] #{task.id} {task.title}"
    if task.description:
        line += f" - {task.description}"
    return line


def format_tasks(view: ViewState) -> str:
    if view.error:
        return f"Error: {view.error}"
    if not view.tasks:
        return "No tasks yet. Add one with /add <title> | <description>."
    return "\n".join(format_task(t) for t in view.tasks)


def parse_create_request(raw: str) -> CreateTaskRequest:
    title, _, description = raw.partition("|")
    return CreateTaskRequest(title=title.strip(), description=description.strip())


async def cmd_help(state: AppState, args: list[str], raw: str) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str], raw: str) -> str:
    await state.store.fetch_tasks()
    return format_tasks(state.store.state)


async def cmd_refresh(state: AppState, args: list[str], raw: str) -> str:
    await state.store.refresh_tasks()
    return format_tasks(state.store.state)


async def cmd_add(state: AppState, args: list[str], raw: str) -> str:
    """
    /add <title> | <description>  -> validate, then create
    /add                          -> resubmit the last request that failed
    """
    if raw:
        request = parse_create_request(raw)
    elif state.draft is not None:
        request = state.draft
    else:
        return "Usage: /add <title> | <description>"

    validation = state.validator.validate_task(request)
    if not validation.is_valid:
        return "Task not created:\n" + "\n".join(f"  - {e}" for e in validation.errors)

    try:
        task = await state.store.create_task(request)
    except HttpError as e:
        state.draft = request
        logger.debug("create failed, draft kept: %r", request)
        return f"Could not create task: {e.message}\nUse /add with no arguments to try again."

    state.draft = None
    return f"Created: {format_task(task)}"


async def cmd_done(state: AppState, args: list[str], raw: str) -> str:
    if len(args) != 1:
        return "Usage: /done <id>"
    try:
        task_id = int(args[0].lstrip("#"))
    except ValueError:
        return f"Not a task id: {args[0]}"

    await state.store.complete_task(task_id)
    view = state.store.state
    if view.error:
        return f"Error: {view.error}"
    return f"Task #{task_id} completed."


async def cmd_clear(state: AppState, args: list[str], raw: str) -> str:
    state.store.clear_error()
    return "Error cleared."


async def cmd_status(state: AppState, args: list[str], raw: str) -> str:
    view = state.store.state
    done = sum(1 for t in view.tasks if t.completed)
    return (
        "Status:\n"
        f"  API: {state.http.base_url}\n"
        f"  Tasks: {len(view.tasks)} ({done} completed)\n"
        f"  Loading: {view.loading}  Refreshing: {view.refreshing}\n"
        f"  Error: {view.error or '-'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Fetch and show tasks.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the server.")
registry.register("add", cmd_add, help_text="Create a task: /add <title> | <description>.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("clear", cmd_clear, help_text="Clear the current error.")
registry.register("status", cmd_status, help_text="Show loading/error state and task counts.")
