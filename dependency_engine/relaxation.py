"""Dijkstra-style relaxation over the task graph."""

from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from dependency_engine.graph import ROOT_ID, TaskGraph, WeightFunction

logger = logging.getLogger(__name__)


@dataclass
class RelaxationResult:
    """Per-run distances and predecessors from one source."""

    source: int
    distances: dict[int, float]
    predecessors: dict[int, Optional[int]]
    visit_order: list[int] = field(default_factory=list)

    def total_distance(self, task_id: int) -> float:
        return self.distances.get(task_id, math.inf)

    def is_reachable(self, task_id: int) -> bool:
        return not math.isinf(self.total_distance(task_id))

    def path_to(self, task_id: int) -> list[int]:
        """Walk predecessors back to the source; empty when unreachable."""

        if not self.is_reachable(task_id):
            return []

        path: list[int] = []
        current: Optional[int] = task_id
        while current is not None:
            path.append(current)
            current = self.predecessors.get(current)
        path.reverse()

        if path[0] != self.source:
            return []
        return path


def relax(
    graph: TaskGraph,
    weight_fn: WeightFunction,
    reference_time: datetime,
    source: int = ROOT_ID,
) -> RelaxationResult:
    """Minimum cumulative weight from ``source`` to every task.

    Nodes are finalized in order of (distance, input position), so equal
    distances resolve to the task that appeared first in the input.
    """

    distances: dict[int, float] = {task_id: math.inf for task_id in graph.nodes}
    predecessors: dict[int, Optional[int]] = {task_id: None for task_id in graph.nodes}
    distances[source] = 0.0
    predecessors[source] = None

    visited: set[int] = set()
    visit_order: list[int] = []
    heap: list[tuple[float, int, int]] = [(0.0, graph.position(source), source)]

    while heap:
        distance, _, current = heapq.heappop(heap)
        if current in visited or distance > distances[current]:
            continue
        visited.add(current)
        visit_order.append(current)

        current_task = graph.node(current)
        for dependent in graph.dependents(current):
            if dependent in visited:
                continue
            weight = weight_fn(current_task, graph.nodes[dependent], reference_time)
            if weight < 0:
                raise ValueError(f"Negative edge weight {weight} into task {dependent}")
            candidate = distance + weight
            if candidate < distances[dependent]:
                distances[dependent] = candidate
                predecessors[dependent] = current
                heapq.heappush(heap, (candidate, graph.position(dependent), dependent))

    unreachable = [task_id for task_id in graph.nodes if math.isinf(distances[task_id])]
    if unreachable:
        logger.debug("Relaxation from %s left %d tasks unreachable", source, len(unreachable))

    return RelaxationResult(
        source=source,
        distances=distances,
        predecessors=predecessors,
        visit_order=visit_order,
    )
