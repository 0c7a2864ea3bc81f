"""Statistical utility functions for safe calculations."""

import statistics
from typing import Iterable, List


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: The numerator
        denominator: The denominator
        default: Value to return if denominator is zero

    Returns:
        Result of division or default value
    """
    return numerator / denominator if denominator > 0 else default


def safe_mean(values: List[float], default: float = 0.0) -> float:
    """
    Safely calculate mean of values, returning default if list is empty.

    Args:
        values: List of numeric values
        default: Value to return if list is empty

    Returns:
        Mean of values or default value
    """
    return statistics.fmean(values) if values else default


def population_variance(values: List[float], default: float = 0.0) -> float:
    """
    Population variance (divides by n), returning default for an empty list.

    Args:
        values: List of numeric values
        default: Value to return if list is empty

    Returns:
        Variance of values or default value
    """
    return statistics.pvariance(values) if values else default


def kda_ratio(kills: int, deaths: int, assists: int) -> float:
    """
    Calculate KDA (Kill/Death/Assist) ratio.

    KDA = (Kills + Assists) / Deaths
    If deaths is 0, KDA = Kills + Assists
    """
    if deaths == 0:
        return float(kills + assists)
    return float(kills + assists) / deaths


def win_rate_percent(outcomes: Iterable[bool]) -> float:
    """Percentage of wins in a sequence of outcomes, 0 when empty."""
    results = list(outcomes)
    return safe_divide(sum(100 for won in results if won), len(results))
