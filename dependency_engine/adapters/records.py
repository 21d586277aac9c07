"""Coercion of raw task records into validated task nodes."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from dependency_engine.schema import Priority, Status, TaskNode

_REQUIRED_FIELDS = ("id", "title")
_DUE_DATE_KEYS = ("dueDate", "due_date")
_DEPENDENCY_KEYS = ("dependencies", "dependsOnTaskIds", "depends_on")


def _first_present(item: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = item.get(key)
        if value not in (None, ""):
            return value
    return None


def parse_timestamp(value: Any) -> datetime:
    """Accept a datetime or an ISO-8601 string (a trailing ``Z`` means UTC)."""

    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_dependencies(value: Any) -> tuple[int, ...]:
    if value in (None, ""):
        return ()
    if isinstance(value, str):
        parts = [part for part in value.replace(",", ";").split(";") if part.strip()]
    else:
        parts = list(value)
    return tuple(int(str(part).strip()) for part in parts)


def parse_record(item: dict, index: int) -> TaskNode:
    """Build a TaskNode from one record, filling documented defaults."""

    missing = [name for name in _REQUIRED_FIELDS if item.get(name) in (None, "")]
    if missing:
        raise ValueError(f"Record {index}: missing required fields {missing}")

    try:
        task_id = int(item["id"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Record {index}: invalid id {item['id']!r}") from exc

    duration_raw = item.get("duration")
    duration = 1.0
    if duration_raw not in (None, ""):
        try:
            duration = float(duration_raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Record {index}: invalid duration") from exc

    due_raw = _first_present(item, _DUE_DATE_KEYS)
    due_date = None
    if due_raw is not None:
        try:
            due_date = parse_timestamp(due_raw)
        except ValueError as exc:
            raise ValueError(f"Record {index}: malformed due date") from exc

    try:
        priority = Priority(item.get("priority") or Priority.MEDIUM)
        status = Status(item.get("status") or Status.TODO)
    except ValueError as exc:
        raise ValueError(f"Record {index}: {exc}") from exc

    try:
        dependencies = parse_dependencies(_first_present(item, _DEPENDENCY_KEYS))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Record {index}: invalid dependencies") from exc

    return TaskNode(
        id=task_id,
        title=str(item["title"]).strip(),
        duration=duration,
        priority=priority,
        status=status,
        due_date=due_date,
        dependencies=dependencies,
    )


def coerce_tasks(tasks) -> list[TaskNode]:
    """Pass TaskNodes through and parse anything else as a record."""

    return [task if isinstance(task, TaskNode) else parse_record(task, i) for i, task in enumerate(tasks, start=1)]
