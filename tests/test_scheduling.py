import math
from datetime import datetime, timedelta

import pytest

from dependency_engine.config import EngineConfig, get_engine_config
from dependency_engine.critical_path import build_result
from dependency_engine.graph import ROOT_ID, TaskGraph, build_graph
from dependency_engine.relaxation import relax
from dependency_engine.schema import Priority, Status, TaskNode
from dependency_engine.scheduling import order_graph, schedule_order, update_task_priorities
from dependency_engine.synthetic import generate_tasks
from dependency_engine.weights import WeightStrategy, get_weight_function, schedule_weight

REF = datetime(2025, 1, 1, 9, 0)


def independent_tasks():
    return [
        TaskNode(1, "Medium, no due date"),
        TaskNode(2, "High, due now", priority=Priority.HIGH, due_date=REF),
        TaskNode(3, "Due in 25 days", due_date=REF + timedelta(days=25)),
    ]


def test_independent_tasks_order_by_own_weight_with_stable_ties():
    rows = schedule_order(independent_tasks(), REF)
    assert [row.task_id for row in rows] == [3, 1, 2]
    assert [row.priority_distance for row in rows] == [6, 15, 15]
    assert [row.execution_order for row in rows] == [1, 2, 3]


def test_independent_tasks_connect_only_to_root():
    graph = build_graph(independent_tasks())
    relaxation = relax(graph, get_weight_function(WeightStrategy.SCHEDULE), REF)
    for task in graph:
        assert relaxation.path_to(task.id) == [ROOT_ID, task.id]
        assert relaxation.total_distance(task.id) == schedule_weight(None, task, REF)


def test_completed_task_is_last():
    tasks = [TaskNode(1, "Done already", status=Status.COMPLETED), TaskNode(2, "Open")]
    rows = schedule_order(tasks, REF)
    assert [row.task_id for row in rows] == [2, 1]
    assert rows[-1].priority_distance == 1000
    assert rows[-1].urgency_score == 0


def test_dependent_accumulates_weight_and_fan_in():
    tasks = [TaskNode(1, "A"), TaskNode(2, "B", dependencies=(1,))]
    rows = schedule_order(tasks, REF)
    assert [row.task_id for row in rows] == [1, 2]
    assert rows[1].priority_distance == 15 + 17
    assert rows[1].dependency_weight == 1


def test_critical_path_flags():
    tasks = [
        TaskNode(1, "A", duration=2),
        TaskNode(2, "B", duration=3, dependencies=(1,)),
        TaskNode(3, "C", duration=1, dependencies=(1,)),
    ]
    flags = {row.task_id: row.critical_path for row in schedule_order(tasks, REF)}
    assert flags == {1: True, 2: True, 3: False}


def test_schedule_order_is_deterministic():
    tasks = generate_tasks(120, seed=7, reference_time=REF)
    first = schedule_order(tasks, REF)
    second = schedule_order(list(tasks), REF)
    assert first == second


def test_pairwise_profile_produces_same_ordering_columns():
    tasks = generate_tasks(40, seed=11, reference_time=REF)
    default_rows = schedule_order(tasks, REF)
    pairwise_rows = schedule_order(tasks, REF, get_engine_config("pairwise"))
    assert [r.task_id for r in default_rows] == [r.task_id for r in pairwise_rows]
    assert [r.priority_distance for r in default_rows] == [r.priority_distance for r in pairwise_rows]


def test_empty_input_yields_empty_order():
    assert schedule_order([], REF) == []


def test_update_task_priorities_recomputes_everything():
    tasks = independent_tasks()
    assert update_task_priorities(tasks, [2], REF) == schedule_order(tasks, REF)
    with pytest.raises(ValueError):
        update_task_priorities(tasks, [99], REF)


def test_tasks_cut_off_from_root_are_ranked_last():
    graph = TaskGraph(
        {
            1: TaskNode(1, "A"),
            2: TaskNode(2, "B", dependencies=(3,)),
            3: TaskNode(3, "C", dependencies=(2,)),
        }
    )
    rows = order_graph(graph, REF, EngineConfig(), critical_path=build_result(graph, [1]))

    assert [row.task_id for row in rows] == [1, 2, 3]
    assert rows[0].reachable and rows[0].critical_path
    assert rows[0].priority_distance == 15
    for row in rows[1:]:
        assert math.isinf(row.priority_distance)
        assert not row.reachable
        assert not row.critical_path
        assert row.to_dict()["priorityDistance"] is None
