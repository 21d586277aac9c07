"""Run the dependency analysis on a CSV/JSON task file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dependency_engine.adapters import csv_adapter, json_adapter
from dependency_engine.adapters.records import parse_timestamp
from dependency_engine.config import ENGINE_PROFILES, get_engine_config
from dependency_engine.engine import analyze
from dependency_engine.errors import SchedulingError


def _load_tasks(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> int:
    parser = argparse.ArgumentParser(description="Analyze task dependencies")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON task file")
    parser.add_argument("--at", help="Reference time (ISO-8601), defaults to now")
    parser.add_argument("--profile", default="default", choices=sorted(ENGINE_PROFILES))
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    reference_time = parse_timestamp(args.at) if args.at else datetime.now()

    try:
        tasks = _load_tasks(Path(args.data))
        report = analyze(tasks, reference_time, get_engine_config(args.profile))
    except SchedulingError as exc:
        print(json.dumps({"error": type(exc).__name__, "message": str(exc)}, indent=2))
        return 1

    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
