import json
from datetime import datetime
from pathlib import Path

import pytest

from dependency_engine.adapters.json_adapter import parse
from dependency_engine.engine import analyze
from dependency_engine.errors import CircularDependencyDetected, InvalidTaskReference

REF = datetime(2025, 3, 3, 9, 0)
SAMPLE = Path(__file__).resolve().parents[1] / "examples" / "sample_tasks.json"


def test_analyze_sample_project():
    report = analyze(parse(str(SAMPLE)), REF)

    assert report.critical_path.path == [1, 2, 4, 5, 7]
    assert report.critical_path.total_duration == pytest.approx(14.5)
    assert report.critical_path.bottleneck.task_id == 4

    critical = {row.task_id for row in report.schedule_order if row.critical_path}
    assert critical == {1, 2, 4, 5, 7}
    # the completed kickoff task pushes its whole subtree behind the independent ones
    assert [row.task_id for row in report.schedule_order] == [6, 7, 1, 2, 4, 3, 5]
    assert [row.priority_distance for row in report.schedule_order] == [23, 33, 1000, 1011, 1023, 1026, 1038]
    assert report.next_task().task_id == 6


def test_report_is_json_serialisable():
    report = analyze(parse(str(SAMPLE)), REF)
    payload = json.loads(json.dumps(report.to_dict(), ensure_ascii=False))
    assert payload["criticalPath"]["formattedLabel"].endswith("(14.5 days)")
    assert {"taskId", "executionOrder", "priorityDistance", "urgencyScore", "dependencyWeight", "criticalPath"} <= set(
        payload["scheduleOrder"][0]
    )


def test_analyze_accepts_raw_records():
    report = analyze(
        [
            {"id": 1, "title": "A", "duration": 2},
            {"id": 2, "title": "B", "duration": 3, "dependencies": [1]},
            {"id": 3, "title": "C", "duration": 1, "dependencies": [1]},
        ],
        REF,
    )
    assert report.critical_path.formatted_label == "A → B (5.0 days)"


def test_empty_input_gives_empty_report():
    report = analyze([], REF)
    assert report.schedule_order == []
    assert report.critical_path is None
    assert report.next_task() is None


def test_errors_propagate():
    with pytest.raises(CircularDependencyDetected):
        analyze([{"id": 1, "title": "A", "dependencies": [2]}, {"id": 2, "title": "B", "dependencies": [1]}], REF)
    with pytest.raises(InvalidTaskReference):
        analyze([{"id": 1, "title": "A", "dependencies": [3]}], REF)
