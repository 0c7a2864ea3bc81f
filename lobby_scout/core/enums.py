"""Shared enums used across features.

This module provides a single source of truth for enums used in both schemas and services.
"""

from enum import Enum


class Tier(str, Enum):
    """League of Legends rank tiers."""

    UNRANKED = "UNRANKED"
    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def is_apex(self) -> bool:
        """Whether this is one of the top three competitive tiers."""
        return self in APEX_TIERS


APEX_TIERS = frozenset({Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER})


class Region(str, Enum):
    """Region slugs understood by the OP.GG aggregator."""

    NA = "na"
    EUW = "euw"
    EUNE = "eune"
    KR = "kr"
    JP = "jp"
    BR = "br"
    LAN = "lan"
    LAS = "las"
    OCE = "oce"
    RU = "ru"
    TR = "tr"
    SG = "sg"
    PH = "ph"
    TW = "tw"
    VN = "vn"
    TH = "th"


class AnalysisState(str, Enum):
    """Lifecycle of a single player's analysis."""

    PENDING = "pending"
    SEARCHING = "searching"
    FETCHING_HISTORY = "fetching_history"
    ANALYZING = "analyzing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AnalysisState.DONE, AnalysisState.FAILED)


class LobbyEventKind(str, Enum):
    """Kinds of events emitted while analyzing a lobby."""

    PROGRESS = "progress"
    RESULT = "result"
    FAILED = "failed"
