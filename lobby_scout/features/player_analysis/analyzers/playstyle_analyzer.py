"""
Playstyle consistency analyzer.

A wide spread of KDA across recent matches hints at different people sharing
the account.
"""

from dataclasses import dataclass
from typing import Sequence

from lobby_scout.utils.statistics import population_variance
from .base_analyzer import BaseHeuristicAnalyzer
from ..schemas import MatchRecord


@dataclass
class PlaystyleResult:
    """Result of playstyle consistency analysis."""

    kda_variance: float
    is_inconsistent: bool


class PlaystyleConsistencyAnalyzer(BaseHeuristicAnalyzer[PlaystyleResult]):
    """Flags a high KDA variance over the recent window."""

    def __init__(self):
        super().__init__("playstyle")

    def analyze(self, matches: Sequence[MatchRecord]) -> PlaystyleResult:
        window = matches[: self._get_window("playstyle")]
        variance = population_variance([m.kda for m in window])
        inconsistent = variance > self._get_threshold("kda_variance")

        self._log_analysis_result(len(window), inconsistent, {"kda_variance": variance})
        return PlaystyleResult(kda_variance=variance, is_inconsistent=inconsistent)
