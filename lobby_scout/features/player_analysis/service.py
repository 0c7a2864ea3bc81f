"""
Player analysis service.

This service runs the full pipeline for one player:
- summoner lookup through the normalizer
- match history lookup through the normalizer
- boosting and performance heuristics
- risk scoring

Progress is reported through an optional callback as the player moves
through ``searching -> fetching_history -> analyzing -> done``.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar, Union

import structlog

from lobby_scout.core.config import Settings, get_global_settings
from lobby_scout.core.enums import AnalysisState, Region
from lobby_scout.core.opgg import (
    PlayerNotFoundError,
    RequestTimeoutError,
    normalize_region,
)
from lobby_scout.protocols import ProgressReporter
from .analyzers import HeuristicAnalyzer
from .config import HEURISTIC_WINDOWS, validate_configuration
from .normalizer import ResponseNormalizer
from .schemas import AnalysisResult, PlayerIdentity
from .scoring import RiskScorer

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _ignore_progress(state: AnalysisState, message: str) -> None:
    return None


class PlayerAnalysisService:
    """Analyzes a single player from lookup to risk score."""

    def __init__(
        self,
        normalizer: ResponseNormalizer,
        settings: Optional[Settings] = None,
        heuristics: Optional[HeuristicAnalyzer] = None,
        scorer: Optional[RiskScorer] = None,
    ):
        """
        Initialize player analysis service.

        :param normalizer: Normalizer wrapping the shared transport
        :param settings: Engine settings (global settings if None)
        :param heuristics: Heuristic analyzer (default analyzers if None)
        :param scorer: Risk scorer (default weights if None)
        """
        validate_configuration()
        self.normalizer = normalizer
        self.settings = settings or get_global_settings()
        self.heuristics = heuristics or HeuristicAnalyzer()
        self.scorer = scorer or RiskScorer()

    async def analyze_player(
        self,
        identity: PlayerIdentity,
        region: Union[Region, str, None] = None,
        progress: Optional[ProgressReporter] = None,
    ) -> AnalysisResult:
        """
        Analyze one player.

        :param identity: Player to analyze
        :param region: Lobby region; the identity's own region takes precedence
        :param progress: Receives state changes with human-readable messages
        :returns: AnalysisResult for the player
        :raises PlayerNotFoundError: If no profile could be found
        :raises RequestTimeoutError: If a lookup stage ran out of time
        :raises OpggAPIError: If every request of a lookup stage failed
        """
        report = progress or _ignore_progress
        resolved_region = normalize_region(
            identity.region or region,
            default=normalize_region(self.settings.default_region),
        )
        log = logger.bind(player=identity.riot_id, region=resolved_region.value)

        report(AnalysisState.SEARCHING, "searching OP.GG...")
        stats = await self._with_timeout(
            self.normalizer.search_summoner(identity, resolved_region),
            "OP.GG summoner search",
        )
        if stats is None:
            raise PlayerNotFoundError(f"{identity.riot_id} not found on OP.GG")

        report(AnalysisState.FETCHING_HISTORY, "fetching match history...")
        history = await self._with_timeout(
            self.normalizer.fetch_match_history(
                identity, resolved_region, self.settings.history_count
            ),
            "OP.GG match history",
        )

        report(AnalysisState.ANALYZING, "analyzing player data...")
        boosting = self.heuristics.detect_boosting(history)
        performance = self.heuristics.detect_performance_issues(
            history[: HEURISTIC_WINDOWS["performance"]]
        )
        risk_score = self.scorer.score(boosting, performance, stats.tier)

        result = AnalysisResult(
            player_stats=stats,
            recent_matches=history[: self.settings.display_match_count],
            matches_analyzed=len(history),
            boosting_flags=boosting,
            performance_flags=performance,
            risk_score=risk_score,
        )

        log.info(
            "Player analysis completed",
            tier=stats.tier.value,
            matches=len(history),
            risk_score=risk_score,
            flash_changes=boosting.flash_change_count,
        )
        report(
            AnalysisState.DONE,
            f"success ({len(history)} matches, risk: {risk_score})",
        )
        return result

    async def _with_timeout(self, awaitable: Awaitable[T], label: str) -> T:
        timeout = self.settings.request_timeout
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"{label} timeout after {int(timeout * 1000)}ms"
            ) from e
