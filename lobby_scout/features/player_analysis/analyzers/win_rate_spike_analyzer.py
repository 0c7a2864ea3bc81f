"""
Win rate spike analyzer.

This module compares the most recent matches with the ones before them to
detect sudden improvements that suggest a stronger player took over.
"""

from dataclasses import dataclass
from typing import Sequence

from lobby_scout.utils.statistics import win_rate_percent
from .base_analyzer import BaseHeuristicAnalyzer
from ..schemas import MatchRecord


@dataclass
class WinRateSpikeResult:
    """Result of win rate spike detection."""

    recent_win_rate: float
    older_win_rate: float
    is_spike: bool

    @property
    def difference(self) -> float:
        return self.recent_win_rate - self.older_win_rate


def is_winrate_spike(recent_win_rate: float, older_win_rate: float, threshold: float) -> bool:
    """Strictly more than ``threshold`` percentage points of improvement."""
    return recent_win_rate - older_win_rate > threshold


class WinRateSpikeAnalyzer(BaseHeuristicAnalyzer[WinRateSpikeResult]):
    """Flags a recent win rate far above the older one."""

    def __init__(self):
        super().__init__("winrate_spike")

    def analyze(self, matches: Sequence[MatchRecord]) -> WinRateSpikeResult:
        """
        Compare matches 1-20 against matches 21-50.

        A window without matches counts as a 0% win rate.
        """
        recent_end = self._get_window("recent_winrate")
        older_end = self._get_window("older_winrate_end")

        recent = win_rate_percent(m.win for m in matches[:recent_end])
        older = win_rate_percent(m.win for m in matches[recent_end:older_end])
        spike = is_winrate_spike(recent, older, self._get_threshold("winrate_spike_points"))

        self._log_analysis_result(
            len(matches),
            spike,
            {"recent_win_rate": recent, "older_win_rate": older},
        )
        return WinRateSpikeResult(
            recent_win_rate=recent, older_win_rate=older, is_spike=spike
        )
