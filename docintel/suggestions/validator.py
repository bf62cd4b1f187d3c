"""Builds suggestion models from the JSON objects the LLM returns."""

from typing import Any

from docintel.suggestions.exceptions import SuggestionValidationError
from docintel.suggestions.models import (
    TASK_PRIORITIES,
    AutofillSuggestion,
    EmailDraft,
    TaskDraft,
    TaskList,
)

_MAX_TASKS = 20


def build_autofill(data: dict[str, Any]) -> AutofillSuggestion:
    """Validate a form-mapper reply.

    Raises:
        SuggestionValidationError: if form_mapping is missing or malformed.
    """
    mapping = data.get("form_mapping")
    if not isinstance(mapping, dict):
        raise SuggestionValidationError("'form_mapping' must be an object")
    for key, value in mapping.items():
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise SuggestionValidationError(f"'form_mapping.{key}' must be a scalar or null")

    missing = data.get("missing_fields", [])
    if not isinstance(missing, list):
        raise SuggestionValidationError("'missing_fields' must be a list")

    return AutofillSuggestion(
        form_mapping=dict(mapping),
        confidence=_confidence(data.get("confidence")),
        missing_fields=[str(name) for name in missing],
    )


def build_email(data: dict[str, Any]) -> EmailDraft:
    """Validate an email-writer reply.

    Raises:
        SuggestionValidationError: if subject or body are not strings.
    """
    subject = data.get("subject")
    body = data.get("body")
    if not isinstance(subject, str) or not isinstance(body, str):
        raise SuggestionValidationError("'subject' and 'body' must be strings")
    return EmailDraft(subject=subject.strip(), body=body.strip())


def build_tasks(data: dict[str, Any]) -> TaskList:
    """Validate a task-planner reply.

    Raises:
        SuggestionValidationError: if tasks is not a list of task objects.
    """
    raw = data.get("tasks")
    if not isinstance(raw, list):
        raise SuggestionValidationError("'tasks' must be a list")
    if len(raw) > _MAX_TASKS:
        raw = raw[:_MAX_TASKS]
    return TaskList(tasks=[_build_task(item, i) for i, item in enumerate(raw)])


def _build_task(raw: Any, index: int) -> TaskDraft:
    if not isinstance(raw, dict):
        raise SuggestionValidationError(f"Task at index {index} must be an object")
    title = raw.get("title")
    if not title or not isinstance(title, str):
        raise SuggestionValidationError(f"Task at index {index}: 'title' must be a non-empty string")

    priority = str(raw.get("priority") or "medium").lower()
    if priority not in TASK_PRIORITIES:
        priority = "medium"

    return TaskDraft(
        title=title.strip(),
        description=str(raw.get("description") or ""),
        due_date=str(raw.get("due_date") or ""),
        priority=priority,
        estimated_time_minutes=_minutes(raw.get("estimated_time_minutes")),
    )


def _confidence(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0.0
    return max(0.0, min(1.0, float(raw)))


def _minutes(raw: Any) -> int:
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return max(0, int(raw))
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return 0
