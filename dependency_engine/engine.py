"""End-to-end analysis: graph, cycle gate, schedule order and critical path."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from dependency_engine.config import EngineConfig
from dependency_engine.critical_path import critical_path_for_graph
from dependency_engine.cycles import ensure_acyclic
from dependency_engine.graph import build_graph
from dependency_engine.scheduling import order_graph
from dependency_engine.schema import CriticalPathResult, ScheduledTask

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    schedule_order: list[ScheduledTask]
    critical_path: Optional[CriticalPathResult]

    def next_task(self) -> Optional[ScheduledTask]:
        """First reachable task in the ordering."""

        return next((row for row in self.schedule_order if row.reachable), None)

    def to_dict(self) -> dict:
        return {
            "scheduleOrder": [row.to_dict() for row in self.schedule_order],
            "criticalPath": self.critical_path.to_dict() if self.critical_path else None,
        }


def analyze(
    tasks: Iterable,
    reference_time: datetime,
    config: Optional[EngineConfig] = None,
) -> AnalysisReport:
    """Run the whole pipeline once against a single reference time.

    An empty task list yields an empty report; any SchedulingError propagates
    unchanged to the caller.
    """

    config = config or EngineConfig()
    graph = build_graph(tasks)
    ensure_acyclic(graph)

    if not len(graph):
        return AnalysisReport(schedule_order=[], critical_path=None)

    critical = critical_path_for_graph(graph, config.critical_path_strategy)
    rows = order_graph(graph, reference_time, config, critical_path=critical)

    logger.info(
        "Analyzed %d tasks at %s: critical path %s",
        len(graph),
        reference_time.isoformat(),
        critical.formatted_label,
    )
    return AnalysisReport(schedule_order=rows, critical_path=critical)
