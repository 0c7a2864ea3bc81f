"""Player analysis feature: normalization, heuristics and risk scoring."""

from .schemas import (
    PlayerIdentity,
    PlayerStats,
    MatchRecord,
    BoostingFlags,
    PerformanceFlags,
    AnalysisResult,
)
from .normalizer import (
    ResponseNormalizer,
    normalize_summoner,
    normalize_match_history,
)
from .aggregator import MatchHistoryAggregator
from .analyzers import HeuristicAnalyzer
from .scoring import RiskScorer
from .service import PlayerAnalysisService

__all__ = [
    "PlayerIdentity",
    "PlayerStats",
    "MatchRecord",
    "BoostingFlags",
    "PerformanceFlags",
    "AnalysisResult",
    "ResponseNormalizer",
    "normalize_summoner",
    "normalize_match_history",
    "MatchHistoryAggregator",
    "HeuristicAnalyzer",
    "RiskScorer",
    "PlayerAnalysisService",
]
