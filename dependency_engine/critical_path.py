"""Critical path analysis on the task DAG.

The critical path is the chain of dependent tasks with the largest total
duration. Only durations count here; urgency, priority and status belong to
the schedule ordering.

Two strategies are available:

* ``topological`` walks Kahn's order once, keeping for every task the longest
  cumulative duration that reaches it and the predecessor that produced it.
  The task with the largest value ends the path. O(V + E).
* ``pairwise`` runs a duration-weighted relaxation from every start task and,
  for every (start, end) pair with a route, takes the shortest chain; the
  longest of those chains wins. One relaxation per start task.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from datetime import datetime
from typing import Iterable, Optional

from dependency_engine.config import CRITICAL_PATH_STRATEGIES, EngineConfig
from dependency_engine.cycles import ensure_acyclic
from dependency_engine.errors import CircularDependencyDetected, NoEndNode, NoPathFound, NoStartNode
from dependency_engine.formatting import format_path
from dependency_engine.graph import TaskGraph, build_graph
from dependency_engine.relaxation import relax
from dependency_engine.schema import CriticalPathResult, CriticalPathStep
from dependency_engine.weights import WeightStrategy, get_weight_function

logger = logging.getLogger(__name__)

# Durations ignore the clock; relaxation still takes a timestamp.
_EPOCH = datetime(1970, 1, 1)


def build_result(graph: TaskGraph, path: list[int]) -> CriticalPathResult:
    """Attach per-step and cumulative durations plus the formatted label."""

    steps: list[CriticalPathStep] = []
    cumulative = 0.0
    for task_id in path:
        task = graph.nodes[task_id]
        cumulative += task.duration
        steps.append(
            CriticalPathStep(
                task_id=task_id,
                title=task.title,
                duration=task.duration,
                cumulative_duration=cumulative,
            )
        )

    total = steps[-1].cumulative_duration if steps else 0.0
    return CriticalPathResult(
        path=list(path),
        steps=steps,
        total_duration=total,
        formatted_label=format_path((step.title for step in steps), total),
    )


def _require_endpoints(graph: TaskGraph) -> None:
    if not graph.sources():
        raise NoStartNode()
    if not graph.sinks():
        raise NoEndNode()


def _check_task(graph: TaskGraph, task_id: int) -> None:
    if task_id not in graph:
        raise ValueError(f"Unknown task id {task_id}")


def optimal_path(graph: TaskGraph, start_id: int, end_id: int) -> CriticalPathResult:
    """Shortest duration chain from ``start_id`` to ``end_id`` in an acyclic graph."""

    _check_task(graph, start_id)
    _check_task(graph, end_id)
    relaxation = relax(graph, get_weight_function(WeightStrategy.DURATION), _EPOCH, source=start_id)
    path = relaxation.path_to(end_id)
    if not path:
        raise NoPathFound(start_id, end_id)
    return build_result(graph, path)


def all_optimal_paths(graph: TaskGraph) -> dict[tuple[int, int], CriticalPathResult]:
    """Shortest duration chain for every reachable (start, end) pair, in input order."""

    _require_endpoints(graph)
    weight_fn = get_weight_function(WeightStrategy.DURATION)
    sinks = graph.sinks()

    results: dict[tuple[int, int], CriticalPathResult] = {}
    for start in graph.sources():
        relaxation = relax(graph, weight_fn, _EPOCH, source=start.id)
        for end in sinks:
            path = relaxation.path_to(end.id)
            if not path:
                logger.debug("No path from task %s to task %s, skipping", start.id, end.id)
                continue
            results[(start.id, end.id)] = build_result(graph, path)
    return results


def pairwise_critical_path(graph: TaskGraph) -> CriticalPathResult:
    paths = all_optimal_paths(graph)
    if not paths:
        raise NoPathFound()

    critical: Optional[CriticalPathResult] = None
    for result in paths.values():
        if critical is None or result.total_duration > critical.total_duration:
            critical = result
    return critical


def topological_critical_path(graph: TaskGraph) -> CriticalPathResult:
    _require_endpoints(graph)

    in_degree = {task.id: len(task.dependencies) for task in graph}
    longest: dict[int, float] = {}
    previous: dict[int, Optional[int]] = {}
    queue = deque()
    for task in graph.sources():
        longest[task.id] = task.duration
        previous[task.id] = None
        queue.append(task.id)

    order: list[int] = []
    while queue:
        current = queue.popleft()
        order.append(current)
        for dependent in graph.dependents(current):
            candidate = longest[current] + graph.nodes[dependent].duration
            if candidate > longest.get(dependent, -math.inf):
                longest[dependent] = candidate
                previous[dependent] = current
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    if len(order) != len(graph):
        stalled = next(task_id for task_id in graph.nodes if in_degree[task_id] > 0)
        raise CircularDependencyDetected(stalled)

    end = order[0]
    for task_id in order:
        if longest[task_id] > longest[end]:
            end = task_id

    path: list[int] = []
    current: Optional[int] = end
    while current is not None:
        path.append(current)
        current = previous[current]
    path.reverse()
    return build_result(graph, path)


def critical_path_for_graph(graph: TaskGraph, strategy: str = "topological") -> CriticalPathResult:
    """Dispatch to a strategy; the caller has already rejected cycles."""

    if strategy not in CRITICAL_PATH_STRATEGIES:
        raise ValueError(f"Unknown critical path strategy {strategy!r}")
    logger.debug("Computing critical path of %d tasks with %s strategy", len(graph), strategy)
    if strategy == "pairwise":
        return pairwise_critical_path(graph)
    return topological_critical_path(graph)


def find_critical_path(
    tasks: Iterable,
    strategy: Optional[str] = None,
    config: Optional[EngineConfig] = None,
) -> CriticalPathResult:
    """Longest-duration chain of dependent tasks.

    Raises CircularDependencyDetected before any path work if the dependencies loop.
    """

    config = config or EngineConfig()
    graph = build_graph(tasks)
    ensure_acyclic(graph)
    return critical_path_for_graph(graph, strategy or config.critical_path_strategy)


def find_optimal_path(tasks: Iterable, start_id: int, end_id: int) -> CriticalPathResult:
    graph = build_graph(tasks)
    ensure_acyclic(graph)
    return optimal_path(graph, start_id, end_id)


def find_all_optimal_paths(tasks: Iterable) -> dict[tuple[int, int], CriticalPathResult]:
    """Every independent start-to-end chain, useful for spotting parallel workstreams."""

    graph = build_graph(tasks)
    ensure_acyclic(graph)
    return all_optimal_paths(graph)
