"""Task graph construction with a synthetic root node."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Iterator, Optional

from dependency_engine.adapters.records import coerce_tasks
from dependency_engine.errors import DuplicateTaskId, InvalidTaskReference
from dependency_engine.schema import TaskNode

logger = logging.getLogger(__name__)

ROOT_ID = 0

WeightFunction = Callable[[Optional[TaskNode], TaskNode, datetime], float]


class TaskGraph:
    """Id -> TaskNode mapping plus the synthetic root.

    Edges point from prerequisite to dependent and are derived on demand; tasks
    without declared dependencies hang off ``ROOT_ID``.
    """

    def __init__(self, nodes: dict[int, TaskNode]):
        self.nodes = nodes
        self._order = {task_id: position for position, task_id in enumerate(nodes)}
        self._dependents: dict[int, list[int]] = {ROOT_ID: []}
        for task_id in nodes:
            self._dependents[task_id] = []
        for task in nodes.values():
            for prerequisite in self.predecessors(task.id):
                self._dependents[prerequisite].append(task.id)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.nodes

    def __iter__(self) -> Iterator[TaskNode]:
        return iter(self.nodes.values())

    def node(self, task_id: int) -> Optional[TaskNode]:
        """Return the task for ``task_id``; ``None`` stands for the root."""

        if task_id == ROOT_ID:
            return None
        return self.nodes[task_id]

    def position(self, task_id: int) -> int:
        """Input position of a task, with the root ahead of everything."""

        return -1 if task_id == ROOT_ID else self._order[task_id]

    def predecessors(self, task_id: int) -> tuple[int, ...]:
        if task_id == ROOT_ID:
            return ()
        return self.nodes[task_id].dependencies or (ROOT_ID,)

    def dependents(self, task_id: int) -> list[int]:
        return list(self._dependents[task_id])

    def sources(self) -> list[TaskNode]:
        """Tasks with no declared dependencies."""

        return [task for task in self.nodes.values() if not task.dependencies]

    def sinks(self) -> list[TaskNode]:
        """Tasks nothing else depends on."""

        return [task for task in self.nodes.values() if not self._dependents[task.id]]

    def edges(self, weight_fn: WeightFunction, reference_time: datetime) -> list[tuple[int, int, float]]:
        """Materialize ``(from, to, weight)`` triples for inspection."""

        return [
            (prerequisite, task.id, weight_fn(self.node(prerequisite), task, reference_time))
            for task in self.nodes.values()
            for prerequisite in self.predecessors(task.id)
        ]


def build_graph(tasks: Iterable) -> TaskGraph:
    """Build a graph from task nodes or raw records, checking every reference."""

    nodes: dict[int, TaskNode] = {}
    for task in coerce_tasks(tasks):
        if task.id in nodes:
            raise DuplicateTaskId(task.id)
        nodes[task.id] = task

    for task in nodes.values():
        for dependency in task.dependencies:
            if dependency not in nodes:
                raise InvalidTaskReference(task.id, dependency)

    graph = TaskGraph(nodes)
    logger.debug("Built task graph with %d tasks, %d attached to root", len(graph), len(graph.dependents(ROOT_ID)))
    return graph
