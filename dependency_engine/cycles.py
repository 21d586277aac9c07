"""Circular dependency detection.

Three-colour depth-first search over each task's ``dependencies``. The search
keeps its own stack of ``(task_id, next_dependency_index)`` frames, so graph
depth is bounded by memory rather than by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import Optional

from dependency_engine.errors import CircularDependencyDetected
from dependency_engine.graph import TaskGraph

logger = logging.getLogger(__name__)

_WHITE, _GRAY, _BLACK = 0, 1, 2


def find_cycle(graph: TaskGraph) -> Optional[list[int]]:
    """Return one cycle as ``[a, b, ..., a]`` or ``None`` when the graph is a DAG.

    Roots are visited in input order, so the reported cycle is deterministic.
    """

    color = {task_id: _WHITE for task_id in graph.nodes}

    for start in graph.nodes:
        if color[start] != _WHITE:
            continue

        color[start] = _GRAY
        stack: list[list[int]] = [[start, 0]]
        path = [start]

        while stack:
            frame = stack[-1]
            node, index = frame
            dependencies = graph.nodes[node].dependencies

            if index >= len(dependencies):
                color[node] = _BLACK
                stack.pop()
                path.pop()
                continue

            frame[1] = index + 1
            dependency = dependencies[index]
            state = color.get(dependency, _BLACK)
            if state == _GRAY:
                return path[path.index(dependency):] + [dependency]
            if state == _WHITE:
                color[dependency] = _GRAY
                stack.append([dependency, 0])
                path.append(dependency)

    return None


def has_circular_dependencies(graph: TaskGraph) -> bool:
    return find_cycle(graph) is not None


def ensure_acyclic(graph: TaskGraph) -> None:
    """Raise CircularDependencyDetected if any dependency chain loops back."""

    cycle = find_cycle(graph)
    if cycle is not None:
        logger.warning("Circular dependency detected: %s", " -> ".join(map(str, cycle)))
        raise CircularDependencyDetected(cycle[0], cycle)
