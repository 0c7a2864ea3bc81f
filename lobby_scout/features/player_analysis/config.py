"""
Configuration for player analysis heuristics.

This module contains the thresholds, windows and risk weights used by the
heuristic analyzers and the risk scorer.
"""

from typing import Dict

import structlog

logger = structlog.get_logger(__name__)

# Heuristic thresholds configuration
HEURISTIC_THRESHOLDS: Dict[str, float] = {
    "winrate_spike_points": 30.0,  # Recent minus older win rate, percentage points
    "kda_variance": 2.0,  # KDA variance over the recent window
    "feeding_deaths": 10.0,  # Mean deaths per match
    "poor_kda": 1.0,  # Mean KDA
    "low_vision_score": 15.0,  # Mean vision score
    "cs_variance": 2500.0,  # Variance of minions killed
}

# Match windows, counted from the most recent match
HEURISTIC_WINDOWS: Dict[str, int] = {
    "recent_winrate": 20,  # Matches 1-20
    "older_winrate_end": 50,  # Matches 21-50
    "playstyle": 20,
    "performance": 5,
}

# Additive risk score weights
RISK_WEIGHTS: Dict[str, int] = {
    "flash_change": 10,  # Per flash slot change
    "winrate_spike": 25,
    "inconsistent_playstyle": 15,
    "feeding": 20,
    "poor_kda": 15,
    "low_vision": 10,
    "inconsistent_cs": 10,
    "apex_tier": 20,  # Master+ accounts already looking suspicious
}

APEX_TIER_SCORE_THRESHOLD = 30
RISK_SCORE_MIN = 0
RISK_SCORE_MAX = 100


def validate_configuration() -> None:
    """
    Validate heuristic configuration parameters.

    Raises:
        ValueError: If configuration is invalid
    """
    for name, value in HEURISTIC_THRESHOLDS.items():
        if value < 0:
            raise ValueError(f"Threshold {name} must be non-negative")

    if HEURISTIC_WINDOWS["older_winrate_end"] <= HEURISTIC_WINDOWS["recent_winrate"]:
        raise ValueError("older_winrate_end must be greater than recent_winrate")

    for name, weight in RISK_WEIGHTS.items():
        if weight < 0:
            raise ValueError(f"Weight {name} must be non-negative")

    if not RISK_SCORE_MIN < RISK_SCORE_MAX:
        raise ValueError("Risk score bounds are inverted")

    logger.debug(
        "Heuristic configuration validated",
        thresholds=len(HEURISTIC_THRESHOLDS),
        weights=len(RISK_WEIGHTS),
    )
