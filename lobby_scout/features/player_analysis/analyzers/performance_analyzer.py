"""
Recent performance analyzer.

Looks at the last few matches for feeding and poor-play indicators.
"""

from typing import Sequence

from lobby_scout.utils.statistics import population_variance, safe_mean
from .base_analyzer import BaseHeuristicAnalyzer
from ..schemas import MatchRecord, PerformanceFlags


class RecentPerformanceAnalyzer(BaseHeuristicAnalyzer[PerformanceFlags]):
    """Derives performance flags from the most recent matches."""

    def __init__(self):
        super().__init__("recent_performance")

    def analyze(self, matches: Sequence[MatchRecord]) -> PerformanceFlags:
        """
        Evaluate the five most recent matches.

        :param matches: Match records, most recent first
        :returns: PerformanceFlags, all false when there are no matches
        """
        window = list(matches[: self._get_window("performance")])
        if not window:
            return PerformanceFlags()

        avg_deaths = safe_mean([m.deaths for m in window])
        avg_kda = safe_mean([m.kda for m in window])
        avg_vision = safe_mean([m.vision_score for m in window])
        cs_variance = population_variance([m.minions_killed for m in window])

        flags = PerformanceFlags(
            is_feeding=avg_deaths > self._get_threshold("feeding_deaths"),
            poor_kda=avg_kda < self._get_threshold("poor_kda"),
            low_vision_score=avg_vision < self._get_threshold("low_vision_score"),
            inconsistent_cs=cs_variance > self._get_threshold("cs_variance"),
        )

        self._log_analysis_result(
            len(window),
            any(flags.model_dump().values()),
            {
                "avg_deaths": avg_deaths,
                "avg_kda": avg_kda,
                "avg_vision": avg_vision,
                "cs_variance": cs_variance,
            },
        )
        return flags
