from datetime import datetime, timedelta

from dependency_engine.schema import Priority, Status, TaskNode
from dependency_engine.urgency import urgency_score

REF = datetime(2025, 1, 1, 9, 0)


def test_urgency_score_rules():
    assert urgency_score(TaskNode(1, "A"), REF) == 50
    assert urgency_score(TaskNode(1, "A", due_date=REF + timedelta(days=2)), REF) == 85
    assert urgency_score(TaskNode(1, "A", due_date=REF + timedelta(days=5)), REF) == 70
    assert urgency_score(TaskNode(1, "A", due_date=REF + timedelta(days=10)), REF) == 60
    assert urgency_score(TaskNode(1, "A", due_date=REF + timedelta(days=20)), REF) == 40


def test_priority_adjustments():
    soon_low = TaskNode(1, "A", priority=Priority.LOW, due_date=REF + timedelta(days=2))
    far_high = TaskNode(2, "B", priority=Priority.HIGH, due_date=REF + timedelta(days=20))
    assert urgency_score(soon_low, REF) == 70
    assert urgency_score(far_high, REF) == 60


def test_stuck_high_priority_due_today_is_capped():
    task = TaskNode(1, "A", priority=Priority.HIGH, status=Status.STUCK, due_date=REF)
    assert urgency_score(task, REF) == 100


def test_completed_task_scores_zero():
    task = TaskNode(1, "A", priority=Priority.HIGH, status=Status.COMPLETED, due_date=REF)
    assert urgency_score(task, REF) == 0
