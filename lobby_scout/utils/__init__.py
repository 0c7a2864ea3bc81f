"""Shared helpers."""

from .statistics import (
    safe_divide,
    safe_mean,
    population_variance,
    kda_ratio,
    win_rate_percent,
)

__all__ = [
    "safe_divide",
    "safe_mean",
    "population_variance",
    "kda_ratio",
    "win_rate_percent",
]
