from datetime import datetime

import pytest

from dependency_engine import scheduling
from dependency_engine.critical_path import find_critical_path
from dependency_engine.cycles import ensure_acyclic, find_cycle, has_circular_dependencies
from dependency_engine.errors import CircularDependencyDetected
from dependency_engine.graph import build_graph
from dependency_engine.schema import TaskNode

REF = datetime(2025, 1, 1, 9, 0)


def two_cycle():
    return [TaskNode(1, "A", dependencies=(2,)), TaskNode(2, "B", dependencies=(1,))]


def test_two_task_cycle_is_detected():
    graph = build_graph(two_cycle())
    assert has_circular_dependencies(graph)
    assert find_cycle(graph) == [1, 2, 1]


def test_cycle_behind_a_tail():
    graph = build_graph(
        [
            TaskNode(1, "A", dependencies=(2,)),
            TaskNode(2, "B", dependencies=(3,)),
            TaskNode(3, "C", dependencies=(2,)),
        ]
    )
    with pytest.raises(CircularDependencyDetected) as info:
        ensure_acyclic(graph)
    assert info.value.task_id == 2
    assert info.value.cycle == [2, 3, 2]


def test_dag_has_no_cycle():
    graph = build_graph([TaskNode(1, "A"), TaskNode(2, "B", dependencies=(1,)), TaskNode(3, "C", dependencies=(1, 2))])
    assert find_cycle(graph) is None


def test_deep_chain_does_not_hit_recursion_limit():
    tasks = [TaskNode(1, "T1")] + [TaskNode(i, f"T{i}", dependencies=(i - 1,)) for i in range(2, 5001)]
    assert not has_circular_dependencies(build_graph(tasks))

    looped = [TaskNode(1, "T1", dependencies=(5000,))] + tasks[1:]
    cycle = find_cycle(build_graph(looped))
    assert cycle[0] == cycle[-1] == 1
    assert len(cycle) == 5001


def test_schedule_and_critical_path_reject_cycles():
    with pytest.raises(CircularDependencyDetected):
        scheduling.schedule_order(two_cycle(), REF)
    with pytest.raises(CircularDependencyDetected):
        find_critical_path(two_cycle())


def test_cycle_aborts_before_relaxation(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("relaxation must not run")

    monkeypatch.setattr(scheduling, "relax", fail)
    with pytest.raises(CircularDependencyDetected):
        scheduling.schedule_order(two_cycle(), REF)
