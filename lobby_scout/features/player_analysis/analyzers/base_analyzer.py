"""
Base class for heuristic analyzers.

This module provides the abstract base class that all heuristic analyzers
inherit from to ensure consistent interface and logging.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, Sequence, TypeVar

import structlog

from ..config import HEURISTIC_THRESHOLDS, HEURISTIC_WINDOWS
from ..schemas import MatchRecord

ResultT = TypeVar("ResultT")


class BaseHeuristicAnalyzer(ABC, Generic[ResultT]):
    """
    Abstract base class for heuristic analyzers.

    Analyzers are pure: they read a most-recent-first match sequence and
    return a result object without touching the network.
    """

    def __init__(self, factor_name: str):
        self.factor_name = factor_name
        self.logger = structlog.get_logger(f"{__name__}.{factor_name}")

    @abstractmethod
    def analyze(self, matches: Sequence[MatchRecord]) -> ResultT:
        """
        Analyze a match sequence.

        :param matches: Match records, most recent first
        :returns: Analyzer-specific result
        """

    def _get_threshold(self, threshold_name: str) -> float:
        """
        Get a threshold value from configuration.

        :raises KeyError: If threshold is not found
        """
        if threshold_name not in HEURISTIC_THRESHOLDS:
            raise KeyError(f"Threshold '{threshold_name}' not found in configuration")
        return HEURISTIC_THRESHOLDS[threshold_name]

    def _get_window(self, window_name: str) -> int:
        """
        Get a match window size from configuration.

        :raises KeyError: If window is not found
        """
        if window_name not in HEURISTIC_WINDOWS:
            raise KeyError(f"Window '{window_name}' not found in configuration")
        return HEURISTIC_WINDOWS[window_name]

    def _log_analysis_result(
        self, match_count: int, flagged: bool, context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.logger.debug(
            "Heuristic analysis completed",
            factor=self.factor_name,
            match_count=match_count,
            flagged=flagged,
            **(context or {}),
        )
