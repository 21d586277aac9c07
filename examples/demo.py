"""Demo script for dependency-engine."""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dependency_engine.adapters.json_adapter import parse
from dependency_engine.critical_path import find_all_optimal_paths
from dependency_engine.engine import analyze


def main() -> None:
    tasks = parse("examples/sample_tasks.json")
    report = analyze(tasks, reference_time=datetime(2025, 3, 3, 9, 0))
    print("Critical path:", report.critical_path.formatted_label)
    print("Bottleneck:", report.critical_path.bottleneck.title)
    for row in report.schedule_order:
        flag = "*" if row.critical_path else " "
        print(f"{row.execution_order:>2}. {flag} {row.title} (distance={row.priority_distance}, urgency={row.urgency_score})")
    print("Workstreams:")
    for (start, end), path in find_all_optimal_paths(tasks).items():
        print(f"  {start} -> {end}: {path.formatted_label}")


if __name__ == "__main__":
    main()
