"""Core data schema for dependency scheduling."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from dependency_engine.errors import CircularDependencyDetected


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            value = value.strip().lower()
            for member in cls:
                if member.value == value:
                    return member
        return None


class Status(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    STUCK = "stuck"
    COMPLETED = "completed"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            # "inprogress", "In Progress" and "in_progress" all mean the same thing
            value = value.strip().lower().replace("_", "-").replace(" ", "-")
            if value == "inprogress":
                value = "in-progress"
            for member in cls:
                if member.value == value:
                    return member
        return None


@dataclass(frozen=True)
class TaskNode:
    """Unit of scheduling. Validated on construction."""

    id: int
    title: str
    duration: float = 1.0
    priority: Priority = Priority.MEDIUM
    status: Status = Status.TODO
    due_date: Optional[datetime] = None
    dependencies: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise ValueError(f"Task id must be a positive integer, got {self.id!r}")
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError(f"Task {self.id}: title must be non-empty")
        if not self.duration > 0:
            raise ValueError(f"Task {self.id}: duration must be positive, got {self.duration!r}")

        object.__setattr__(self, "duration", float(self.duration))
        object.__setattr__(self, "priority", Priority(self.priority if self.priority is not None else Priority.MEDIUM))
        object.__setattr__(self, "status", Status(self.status if self.status is not None else Status.TODO))

        deps: list[int] = []
        for dep in self.dependencies:
            if dep == self.id:
                raise CircularDependencyDetected(self.id, [self.id, self.id])
            if dep not in deps:
                deps.append(dep)
        object.__setattr__(self, "dependencies", tuple(deps))


@dataclass
class ScheduledTask:
    """One row of the execution-priority ordering."""

    task_id: int
    title: str
    execution_order: int
    priority_distance: float
    urgency_score: int
    dependency_weight: int
    critical_path: bool
    reachable: bool = True

    def to_dict(self) -> dict:
        return {
            "taskId": self.task_id,
            "title": self.title,
            "executionOrder": self.execution_order,
            "priorityDistance": self.priority_distance if self.reachable else None,
            "urgencyScore": self.urgency_score,
            "dependencyWeight": self.dependency_weight,
            "criticalPath": self.critical_path,
        }


@dataclass(frozen=True)
class CriticalPathStep:
    task_id: int
    title: str
    duration: float
    cumulative_duration: float


@dataclass
class CriticalPathResult:
    """Ordered chain of tasks with per-step and cumulative durations."""

    path: list[int]
    steps: list[CriticalPathStep]
    total_duration: float
    formatted_label: str = ""

    @property
    def bottleneck(self) -> Optional[CriticalPathStep]:
        """Longest single step on the path; first one wins on ties."""

        if not self.steps:
            return None
        return max(self.steps, key=lambda step: step.duration)

    def to_dict(self) -> dict:
        bottleneck = self.bottleneck
        return {
            "path": list(self.path),
            "steps": [
                {
                    "taskId": step.task_id,
                    "title": step.title,
                    "duration": step.duration,
                    "cumulativeDuration": step.cumulative_duration,
                }
                for step in self.steps
            ],
            "totalDuration": self.total_duration,
            "formattedLabel": self.formatted_label,
            "bottleneck": bottleneck.task_id if bottleneck else None,
        }
