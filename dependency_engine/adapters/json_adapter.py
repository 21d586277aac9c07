"""JSON adapter for task records."""

from __future__ import annotations

import json

from dependency_engine.adapters.records import parse_record
from dependency_engine.schema import TaskNode


def parse(file_path: str) -> list[TaskNode]:
    """Parse JSON file into task nodes.

    The payload is either a list of records or an object with a ``tasks`` list.
    """

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict) and "tasks" in payload:
        payload = payload["tasks"]
    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    tasks = []
    for i, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {i}: expected an object")
        tasks.append(parse_record(item, i))
    return tasks
