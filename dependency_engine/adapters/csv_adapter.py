"""CSV adapter for task records."""

from __future__ import annotations

import csv

from dependency_engine.adapters.records import parse_record
from dependency_engine.schema import TaskNode


def parse(file_path: str) -> list[TaskNode]:
    """Parse CSV file into a list of task nodes.

    Dependencies are written as ``;``-separated ids in a ``dependencies`` column.
    """

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        tasks: list[TaskNode] = []
        for row_number, row in enumerate(reader, start=2):
            tasks.append(parse_record(row, row_number))
        return tasks
