"""
Heuristic analyzers.

This package contains individual analyzer modules for the boosting and
performance heuristics, plus the ``HeuristicAnalyzer`` that combines them.
"""

from typing import Sequence

from ..schemas import BoostingFlags, MatchRecord, PerformanceFlags
from .flash_position_analyzer import FlashPositionAnalyzer, FlashPositionResult, flash_slot
from .win_rate_spike_analyzer import (
    WinRateSpikeAnalyzer,
    WinRateSpikeResult,
    is_winrate_spike,
)
from .playstyle_analyzer import PlaystyleConsistencyAnalyzer, PlaystyleResult
from .performance_analyzer import RecentPerformanceAnalyzer


class HeuristicAnalyzer:
    """Runs the boosting and performance heuristics over a match history."""

    def __init__(self):
        self.flash_position = FlashPositionAnalyzer()
        self.winrate_spike = WinRateSpikeAnalyzer()
        self.playstyle = PlaystyleConsistencyAnalyzer()
        self.performance = RecentPerformanceAnalyzer()

    def detect_boosting(self, history: Sequence[MatchRecord]) -> BoostingFlags:
        """Boosting indicators over the full history, most recent first."""
        flash = self.flash_position.analyze(history)
        spike = self.winrate_spike.analyze(history)
        playstyle = self.playstyle.analyze(history)

        return BoostingFlags(
            flash_position_changed=flash.changed,
            flash_change_count=flash.change_count,
            suspicious_winrate_spike=spike.is_spike,
            inconsistent_playstyle=playstyle.is_inconsistent,
        )

    def detect_performance_issues(self, last5: Sequence[MatchRecord]) -> PerformanceFlags:
        """Performance flags over the most recent five matches."""
        return self.performance.analyze(last5)


__all__ = [
    "HeuristicAnalyzer",
    "FlashPositionAnalyzer",
    "FlashPositionResult",
    "flash_slot",
    "WinRateSpikeAnalyzer",
    "WinRateSpikeResult",
    "is_winrate_spike",
    "PlaystyleConsistencyAnalyzer",
    "PlaystyleResult",
    "RecentPerformanceAnalyzer",
]
