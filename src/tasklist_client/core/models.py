# src/tasklist_client/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class Task:
    """A to-do item as returned by the remote API. The server assigns `id`."""

    id: int
    title: str
    description: str = ""
    completed: bool = False

    @classmethod
    def from_api(cls, raw: Any) -> Task:
        """
        Build a Task from a decoded JSON object.

        Raises ValueError/TypeError on a payload that is not a task; the repository
        turns that into an HttpError.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"Task payload must be an object, got {type(raw).__name__}")
        if "id" not in raw:
            raise ValueError("Task payload has no id")
        completed = raw.get("completed")
        if completed is None:
            completed = False
        elif not isinstance(completed, bool):
            raise ValueError(f"Task completed must be a boolean, got {completed!r}")
        return cls(
            id=int(raw["id"]),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            completed=completed,
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
        }


@dataclass(slots=True, frozen=True)
class CreateTaskRequest:
    title: str
    description: str = ""

    def to_api(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description}


@dataclass(slots=True, frozen=True)
class ValidationResult:
    """Outcome of a validation check. Errors are data, never raised."""

    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors
