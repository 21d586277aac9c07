"""Execution-priority ordering of tasks."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from dependency_engine.config import EngineConfig
from dependency_engine.critical_path import critical_path_for_graph
from dependency_engine.cycles import ensure_acyclic
from dependency_engine.graph import TaskGraph, build_graph
from dependency_engine.relaxation import relax
from dependency_engine.schema import CriticalPathResult, ScheduledTask
from dependency_engine.urgency import urgency_score
from dependency_engine.weights import WeightStrategy, get_weight_function

logger = logging.getLogger(__name__)


def order_graph(
    graph: TaskGraph,
    reference_time: datetime,
    config: EngineConfig,
    critical_path: Optional[CriticalPathResult] = None,
) -> list[ScheduledTask]:
    """Rank the tasks of an acyclic graph by cumulative schedule weight from the root."""

    if not len(graph):
        return []

    weight_fn = get_weight_function(WeightStrategy.SCHEDULE, config.weights)
    relaxation = relax(graph, weight_fn, reference_time)
    if critical_path is None:
        critical_path = critical_path_for_graph(graph, config.critical_path_strategy)
    on_critical_path = set(critical_path.path)

    ranked = sorted(
        graph.nodes,
        key=lambda task_id: (relaxation.total_distance(task_id), graph.position(task_id)),
    )

    rows: list[ScheduledTask] = []
    for execution_order, task_id in enumerate(ranked, start=1):
        task = graph.nodes[task_id]
        reachable = relaxation.is_reachable(task_id)
        rows.append(
            ScheduledTask(
                task_id=task_id,
                title=task.title,
                execution_order=execution_order,
                priority_distance=relaxation.total_distance(task_id),
                urgency_score=urgency_score(task, reference_time),
                dependency_weight=len(task.dependencies),
                critical_path=reachable and task_id in on_critical_path,
                reachable=reachable,
            )
        )

    unreachable = sum(1 for row in rows if not row.reachable)
    if unreachable:
        logger.warning("%d tasks are not reachable from the root and were ranked last", unreachable)
    return rows


def schedule_order(
    tasks: Iterable,
    reference_time: datetime,
    config: Optional[EngineConfig] = None,
) -> list[ScheduledTask]:
    """Return tasks sorted by execution priority, lowest cumulative weight first.

    Raises CircularDependencyDetected before relaxing anything if the
    dependencies loop.
    """

    config = config or EngineConfig()
    graph = build_graph(tasks)
    ensure_acyclic(graph)
    return order_graph(graph, reference_time, config)


def update_task_priorities(
    tasks: Iterable,
    updated_task_ids: Iterable[int],
    reference_time: datetime,
    config: Optional[EngineConfig] = None,
) -> list[ScheduledTask]:
    """Recompute the full ordering after some tasks changed.

    There is no incremental mode: every call starts from scratch. The updated ids
    must still exist in ``tasks``.
    """

    graph = build_graph(tasks)
    missing = [task_id for task_id in updated_task_ids if task_id not in graph]
    if missing:
        raise ValueError(f"Updated tasks not present in input: {missing}")
    ensure_acyclic(graph)
    return order_graph(graph, reference_time, config or EngineConfig())
