"""Pydantic schemas for player analysis."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lobby_scout.core.enums import Region, Tier
from lobby_scout.utils.statistics import kda_ratio, safe_divide


class PlayerIdentity(BaseModel):
    """A player to analyze, as supplied by the lobby collaborator."""

    display_name: str = Field(..., min_length=1, description="Riot ID game name")
    tag_line: str = Field(..., min_length=1, description="Riot ID tag line")
    region: Optional[str] = Field(None, description="Region override for this player")
    stable_id: Optional[str] = Field(None, description="PUUID, when known")

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def riot_id(self) -> str:
        """Riot ID in format name#tag."""
        return f"{self.display_name}#{self.tag_line}"

    def matches(self, game_name: Any, tag_line: Any) -> bool:
        """Case-insensitive comparison against an upstream name and tag."""
        return str(game_name or "").casefold() == self.display_name.casefold() and str(
            tag_line or ""
        ).casefold() == self.tag_line.casefold()


class PlayerStats(BaseModel):
    """Ranked profile of a player, normalized from the aggregator."""

    display_name: str
    tag_line: str
    region: Region
    tier: Tier = Tier.UNRANKED
    division: str = Field("", max_length=3, description="Roman numeral I-IV or empty")
    league_points: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    account_level: int = Field(1, ge=0)
    profile_icon_id: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_games(self) -> int:
        return self.wins + self.losses

    @computed_field  # type: ignore[prop-decorator]
    @property
    def win_rate(self) -> float:
        """Win rate as percentage, 0 without ranked games."""
        return safe_divide(self.wins * 100, self.total_games)

    @property
    def display_rank(self) -> str:
        """Human-readable rank (e.g., 'GOLD II')."""
        if self.tier == Tier.UNRANKED:
            return Tier.UNRANKED.value
        return f"{self.tier.value} {self.division}".strip()


class MatchRecord(BaseModel):
    """One match from the target player's point of view."""

    match_id: str = ""
    champion_id: int = 0
    game_type: str = ""
    win: bool = False
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    summoner_spell_a: int = Field(0, description="Spell bound to the first (D) slot")
    summoner_spell_b: int = Field(0, description="Spell bound to the second (F) slot")
    items: List[int] = Field(default_factory=list)
    wards_placed: int = 0
    wards_killed: int = 0
    vision_score: float = 0
    minions_killed: int = 0
    gold_earned: int = 0
    damage_to_champions: int = 0
    duration_seconds: int = 0
    created_at_epoch: int = Field(0, description="Match creation, epoch milliseconds")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def kda(self) -> float:
        return kda_ratio(self.kills, self.deaths, self.assists)


class BoostingFlags(BaseModel):
    """Indicators that someone else may be playing on the account."""

    flash_position_changed: bool = False
    flash_change_count: int = Field(0, ge=0)
    suspicious_winrate_spike: bool = False
    inconsistent_playstyle: bool = False


class PerformanceFlags(BaseModel):
    """Poor-play indicators over the most recent five matches."""

    is_feeding: bool = False
    poor_kda: bool = False
    low_vision_score: bool = False
    inconsistent_cs: bool = False


class AnalysisResult(BaseModel):
    """Full analysis of one lobby player."""

    player_stats: PlayerStats
    recent_matches: List[MatchRecord] = Field(
        default_factory=list, description="Most-recent-first, capped for display"
    )
    matches_analyzed: int = Field(0, ge=0)
    boosting_flags: BoostingFlags
    performance_flags: PerformanceFlags
    risk_score: int = Field(..., ge=0, le=100)

    @property
    def riot_id(self) -> str:
        return f"{self.player_stats.display_name}#{self.player_stats.tag_line}"
