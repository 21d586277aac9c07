"""Edge weight strategies for schedule ordering and critical path analysis."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from functools import partial
from typing import Optional

from dependency_engine.config import WeightConfig
from dependency_engine.graph import WeightFunction
from dependency_engine.schema import Priority, Status, TaskNode

_SECONDS_PER_DAY = 86400.0


class WeightStrategy(str, Enum):
    SCHEDULE = "schedule"
    DURATION = "duration"


def days_until(due_date: datetime, reference_time: datetime) -> float:
    """Fractional days from ``reference_time`` to ``due_date``; negative when overdue.

    A naive timestamp compared with an aware one is taken to be UTC.
    """

    if (due_date.tzinfo is None) != (reference_time.tzinfo is None):
        if due_date.tzinfo is None:
            due_date = due_date.replace(tzinfo=timezone.utc)
        else:
            reference_time = reference_time.replace(tzinfo=timezone.utc)
    return (due_date - reference_time).total_seconds() / _SECONDS_PER_DAY


def urgency_term(task: TaskNode, reference_time: datetime, config: WeightConfig) -> float:
    """Due-date urgency: 30 when due today or overdue, 1 when 30+ days out."""

    if task.due_date is None:
        return config.default_urgency
    days = max(1.0, days_until(task.due_date, reference_time))
    return max(config.min_urgency, min(config.max_urgency, 31.0 - days))


def priority_multiplier(priority: Priority, config: WeightConfig) -> float:
    if priority is Priority.HIGH:
        return config.high_priority_multiplier
    if priority is Priority.LOW:
        return config.low_priority_multiplier
    return config.medium_priority_multiplier


def schedule_weight(
    prerequisite: Optional[TaskNode],
    task: TaskNode,
    reference_time: datetime,
    config: Optional[WeightConfig] = None,
    return_components: bool = False,
):
    """Cost of moving into ``task``; lower means execute sooner.

    The prerequisite does not change the cost, it is accepted so every strategy
    shares one signature. Completed tasks cost ``completed_weight`` plus fan-in.
    """

    config = config or WeightConfig()
    urgency = urgency_term(task, reference_time, config)
    multiplier = priority_multiplier(task.priority, config)
    weight = urgency * multiplier

    if task.status is Status.IN_PROGRESS:
        weight *= config.in_progress_multiplier
    elif task.status is Status.STUCK:
        weight *= config.stuck_multiplier
    elif task.status is Status.COMPLETED:
        weight = config.completed_weight

    fan_in = len(task.dependencies) * config.fan_in_penalty
    # halves round up
    rounded = int(math.floor(max(0.0, weight + fan_in) + 0.5))

    if return_components:
        return {
            "weight": rounded,
            "urgency": urgency,
            "priority_multiplier": multiplier,
            "status": task.status.value,
            "fan_in_penalty": fan_in,
        }

    return rounded


def duration_weight(
    prerequisite: Optional[TaskNode],
    task: TaskNode,
    reference_time: datetime,
    config: Optional[WeightConfig] = None,
) -> float:
    """Duration-only cost: the dependent task's own duration, unrounded."""

    return task.duration


def get_weight_function(strategy, config: Optional[WeightConfig] = None) -> WeightFunction:
    """Resolve a strategy name to a ``(prerequisite, task, reference_time)`` callable."""

    strategy = WeightStrategy(strategy)
    if strategy is WeightStrategy.DURATION:
        return duration_weight
    return partial(schedule_weight, config=config or WeightConfig())
