"""Human-readable rendering of task paths."""

from __future__ import annotations

from typing import Iterable

from dependency_engine.schema import CriticalPathResult

ARROW = " → "


def format_path(titles: Iterable[str], total_duration: float) -> str:
    """Render ``A → B → C (D.D days)``."""

    return f"{ARROW.join(titles)} ({total_duration:.1f} days)"


def format_result(result: CriticalPathResult) -> str:
    return format_path((step.title for step in result.steps), result.total_duration)
