"""Risk scoring for analyzed players."""

from typing import Union

import structlog

from lobby_scout.core.enums import Tier
from .config import (
    APEX_TIER_SCORE_THRESHOLD,
    RISK_SCORE_MAX,
    RISK_SCORE_MIN,
    RISK_WEIGHTS,
)
from .parsers import normalize_tier
from .schemas import BoostingFlags, PerformanceFlags

logger = structlog.get_logger(__name__)


class RiskScorer:
    """Combines heuristic flags and tier into a 0-100 risk score."""

    def __init__(self, weights: dict[str, int] | None = None):
        self.weights = {**RISK_WEIGHTS, **(weights or {})}

    def score(
        self,
        boosting: BoostingFlags,
        performance: PerformanceFlags,
        tier: Union[Tier, str, None],
    ) -> int:
        """
        Calculate the risk score.

        Weights are additive; an apex tier adds a bonus once the running total
        already exceeds the apex threshold. The total is clamped to [0, 100].
        """
        w = self.weights
        score = 0

        if boosting.flash_position_changed:
            score += boosting.flash_change_count * w["flash_change"]
        if boosting.suspicious_winrate_spike:
            score += w["winrate_spike"]
        if boosting.inconsistent_playstyle:
            score += w["inconsistent_playstyle"]

        if performance.is_feeding:
            score += w["feeding"]
        if performance.poor_kda:
            score += w["poor_kda"]
        if performance.low_vision_score:
            score += w["low_vision"]
        if performance.inconsistent_cs:
            score += w["inconsistent_cs"]

        tier_value = tier if isinstance(tier, Tier) else normalize_tier(tier)
        if tier_value.is_apex and score > APEX_TIER_SCORE_THRESHOLD:
            score += w["apex_tier"]

        clamped = max(RISK_SCORE_MIN, min(RISK_SCORE_MAX, score))
        logger.debug("Risk score calculated", raw_score=score, risk_score=clamped, tier=tier_value.value)
        return clamped
