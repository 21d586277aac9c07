"""Display urgency score for tasks."""

from __future__ import annotations

from datetime import datetime

from dependency_engine.schema import Priority, Status, TaskNode
from dependency_engine.weights import days_until


def due_date_score(days_to_due: float) -> int:
    """Return the base score implied by time-to-due-date."""

    if days_to_due < 1:
        return 95
    if days_to_due < 3:
        return 85
    if days_to_due < 7:
        return 70
    if days_to_due < 14:
        return 60
    return 40


def urgency_score(task: TaskNode, reference_time: datetime) -> int:
    """Compute a 0-100 urgency score, independent of graph weights."""

    score = 50
    if task.due_date is not None:
        score = due_date_score(days_until(task.due_date, reference_time))

    if task.priority is Priority.HIGH:
        score = min(100, score + 20)
    elif task.priority is Priority.LOW:
        score = max(0, score - 15)

    if task.status is Status.STUCK:
        score = min(100, score + 30)
    elif task.status is Status.COMPLETED:
        score = 0

    return score
