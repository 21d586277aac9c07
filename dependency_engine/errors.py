"""Error kinds raised by the scheduling engine."""

from __future__ import annotations


class SchedulingError(ValueError):
    """Base class for every engine failure."""


class CircularDependencyDetected(SchedulingError):
    def __init__(self, task_id: int, cycle: list[int] | None = None):
        self.task_id = task_id
        self.cycle = list(cycle) if cycle else [task_id]
        chain = " -> ".join(str(node) for node in self.cycle)
        super().__init__(f"Circular dependency involving task {task_id} ({chain})")


class InvalidTaskReference(SchedulingError):
    def __init__(self, from_id: int, missing_id: int):
        self.from_id = from_id
        self.missing_id = missing_id
        super().__init__(f"Task {from_id} depends on unknown task {missing_id}")


class DuplicateTaskId(SchedulingError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Duplicate task id {task_id}")


class NoStartNode(SchedulingError):
    def __init__(self) -> None:
        super().__init__("No start nodes found (all tasks have dependencies)")


class NoEndNode(SchedulingError):
    def __init__(self) -> None:
        super().__init__("No end nodes found (every task is depended on)")


class NoPathFound(SchedulingError):
    def __init__(self, start_id: int | None = None, end_id: int | None = None):
        self.start_id = start_id
        self.end_id = end_id
        if start_id is None or end_id is None:
            message = "No path found between any start and end task"
        else:
            message = f"No path found from task {start_id} to task {end_id}"
        super().__init__(message)
