# src/tasklist_client/core/validation.py

"""
Field rules for tasks, checked before a create request goes out.

These checks are advisory: the server may validate again. They only save a
round trip for input that is obviously wrong. Both title and description are
measured after trimming surrounding whitespace.
"""

from __future__ import annotations

from .models import CreateTaskRequest, ValidationResult

MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 100
MIN_DESCRIPTION_LENGTH = 5
MAX_DESCRIPTION_LENGTH = 500


def validate_title(title: str) -> ValidationResult:
    trimmed = (title or "").strip()

    if not trimmed:
        return ValidationResult(("Title is required",))
    if len(trimmed) < MIN_TITLE_LENGTH:
        return ValidationResult((f"Title must be at least {MIN_TITLE_LENGTH} characters",))
    if len(trimmed) > MAX_TITLE_LENGTH:
        return ValidationResult((f"Title cannot exceed {MAX_TITLE_LENGTH} characters",))
    return ValidationResult()


def validate_description(description: str) -> ValidationResult:
    trimmed = (description or "").strip()

    # optional field
    if not trimmed:
        return ValidationResult()
    if len(trimmed) < MIN_DESCRIPTION_LENGTH:
        return ValidationResult(
            (f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters",)
        )
    if len(trimmed) > MAX_DESCRIPTION_LENGTH:
        return ValidationResult(
            (f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",)
        )
    return ValidationResult()


def validate_task(request: CreateTaskRequest) -> ValidationResult:
    """Title errors first, then description errors."""
    title_result = validate_title(request.title)
    description_result = validate_description(request.description)
    return ValidationResult(title_result.errors + description_result.errors)


class TaskValidator:
    """Groups the module functions so a validator can be passed around as a port."""

    def validate_title(self, title: str) -> ValidationResult:
        return validate_title(title)

    def validate_description(self, description: str) -> ValidationResult:
        return validate_description(description)

    def validate_task(self, request: CreateTaskRequest) -> ValidationResult:
        return validate_task(request)
