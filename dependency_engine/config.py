"""
Configuration settings for edge weighting and critical path analysis
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WeightConfig:
    """Constants of the schedule edge weight"""

    default_urgency: float = 15.0
    max_urgency: float = 30.0
    min_urgency: float = 1.0
    high_priority_multiplier: float = 0.5
    medium_priority_multiplier: float = 1.0
    low_priority_multiplier: float = 1.5
    in_progress_multiplier: float = 0.6
    stuck_multiplier: float = 0.7
    completed_weight: float = 1000.0
    fan_in_penalty: float = 2.0


@dataclass
class EngineConfig:
    """Overall engine configuration"""

    weights: WeightConfig = field(default_factory=WeightConfig)
    critical_path_strategy: str = "topological"


CRITICAL_PATH_STRATEGIES = ("topological", "pairwise")

# Engine profiles
ENGINE_PROFILES = {
    "default": {
        "critical_path_strategy": "topological",
        "description": "Linear-time longest path over the topological order",
    },
    "pairwise": {
        "critical_path_strategy": "pairwise",
        "description": "Shortest duration chain for every start/end pair, longest one wins",
    },
}


def get_engine_config(profile: str = "default") -> EngineConfig:
    """Get engine configuration for a specific profile"""
    if profile not in ENGINE_PROFILES:
        profile = "default"

    config = ENGINE_PROFILES[profile]
    return EngineConfig(critical_path_strategy=config["critical_path_strategy"])
