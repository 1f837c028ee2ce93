# src/tasklist_client/core/result.py

"""
Explicit success/failure values returned by the HTTP client and the repository.

Callers branch on `isinstance(result, Ok)` (or `result.ok`) instead of catching
exceptions. `unwrap()` is there for callers that do want an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from .errors import HttpError

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True, frozen=True)
class Err:
    error: HttpError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Err]
