"""Deterministic synthetic task graphs for benchmarks and demos."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import numpy as np

from dependency_engine.schema import Priority, Status, TaskNode

_PRIORITIES = (Priority.LOW, Priority.MEDIUM, Priority.HIGH)
_STATUSES = (Status.TODO, Status.IN_PROGRESS, Status.STUCK, Status.COMPLETED)
_STATUS_WEIGHTS = (0.55, 0.25, 0.1, 0.1)


def generate_tasks(
    n_tasks: int,
    seed: int = 42,
    max_dependencies: int = 3,
    reference_time: Optional[datetime] = None,
    due_date_rate: float = 0.8,
) -> list[TaskNode]:
    """Random DAG of ``n_tasks`` tasks; task i only depends on tasks with smaller ids."""

    if n_tasks < 0:
        raise ValueError("n_tasks must be non-negative")

    rng = np.random.default_rng(seed)
    reference_time = reference_time or datetime(2025, 1, 1, 9, 0)

    tasks: list[TaskNode] = []
    for task_id in range(1, n_tasks + 1):
        candidates = task_id - 1
        n_deps = int(rng.integers(0, min(max_dependencies, candidates) + 1)) if candidates else 0
        dependencies = sorted(int(d) + 1 for d in rng.choice(candidates, size=n_deps, replace=False)) if n_deps else []

        due_date = None
        if rng.random() < due_date_rate:
            due_date = reference_time + timedelta(days=float(rng.integers(-3, 45)))

        tasks.append(
            TaskNode(
                id=task_id,
                title=f"Task {task_id}",
                duration=round(float(rng.uniform(0.5, 10.0)), 1),
                priority=_PRIORITIES[int(rng.integers(0, len(_PRIORITIES)))],
                status=_STATUSES[int(rng.choice(len(_STATUSES), p=_STATUS_WEIGHTS))],
                due_date=due_date,
                dependencies=tuple(dependencies),
            )
        )
    return tasks
