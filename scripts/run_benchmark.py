"""Benchmark critical path strategies on synthetic task graphs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dependency_engine.critical_path import critical_path_for_graph
from dependency_engine.graph import build_graph
from dependency_engine.synthetic import generate_tasks


def _time_strategy(graph, strategy: str, repeats: int) -> dict:
    timings = []
    result = None
    for _ in range(repeats):
        started = time.perf_counter()
        result = critical_path_for_graph(graph, strategy)
        timings.append((time.perf_counter() - started) * 1000.0)
    return {
        "mean_ms": float(np.mean(timings)),
        "std_ms": float(np.std(timings)),
        "total_duration": result.total_duration,
        "path_length": len(result.path),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark dependency-engine critical path strategies")
    parser.add_argument("--sizes", type=int, nargs="+", default=[50, 200, 800], help="Task counts to benchmark")
    parser.add_argument("--repeats", type=int, default=5)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    report = {"seed": args.seed, "repeats": args.repeats, "runs": []}
    for size in args.sizes:
        graph = build_graph(generate_tasks(size, seed=args.seed))
        report["runs"].append(
            {
                "n_tasks": size,
                "topological": _time_strategy(graph, "topological", args.repeats),
                "pairwise": _time_strategy(graph, "pairwise", args.repeats),
            }
        )

    print(json.dumps(report, indent=2))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "benchmark_report.json"
    out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved benchmark report to {out_path}")


if __name__ == "__main__":
    main()
