"""
Tests for the player analysis service.
"""

import asyncio

import pytest

from lobby_scout.core.config import Settings
from lobby_scout.core.enums import AnalysisState, Tier
from lobby_scout.core.opgg import (
    GAME_HISTORY_TOOL,
    SUMMONER_SEARCH_TOOL,
    PlayerNotFoundError,
    RequestSpacer,
    RequestTimeoutError,
    Transport,
)
from lobby_scout.features.player_analysis import (
    PlayerAnalysisService,
    PlayerIdentity,
    ResponseNormalizer,
)
from lobby_scout.tests.payloads import (
    FLASH,
    IGNITE,
    history_row,
    history_table,
    league_stats,
    participant,
    summoner_table,
)

FAKER = PlayerIdentity(display_name="Faker", tag_line="KR1")


def flash_swapping_history(total: int = 70):
    """Flash switches key every 10 matches; the 5 latest games are deathly."""
    rows = []
    for i in range(total):
        spells = [FLASH, IGNITE] if (i // 10) % 2 == 0 else [IGNITE, FLASH]
        if i < 5:
            me = participant("Faker", "KR1", spells=spells, kills=10, deaths=12, assists=14)
        else:
            me = participant("Faker", "KR1", spells=spells)
        rows.append(history_row(f"KR_{i}", [participant("Chovy", "KR2"), me]))
    return history_table(rows)


class FakeOpgg:
    """Remote call serving fixed payloads per tool."""

    def __init__(self, summoner=None, history=None, delay: float = 0):
        self.payloads = {SUMMONER_SEARCH_TOOL: summoner, GAME_HISTORY_TOOL: history}
        self.delay = delay
        self.calls = []

    async def __call__(self, function_name, params):
        self.calls.append((function_name, params))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.payloads.get(function_name)


def make_service(remote, **overrides) -> PlayerAnalysisService:
    settings = Settings(request_spacing=0, **overrides)
    transport = Transport(remote, spacer=RequestSpacer(spacing=0))
    return PlayerAnalysisService(ResponseNormalizer(transport), settings=settings)


def gold_summoner():
    return summoner_table([["Faker", "KR1", 700, league_stats("gold", 2, lp=40, wins=30, losses=20)]])


class TestPlayerAnalysisService:
    """Test cases for PlayerAnalysisService."""

    @pytest.mark.asyncio
    async def test_full_analysis(self):
        """Test a 70 match history with flash swaps and heavy recent deaths."""
        remote = FakeOpgg(summoner=gold_summoner(), history=flash_swapping_history())
        progress = []

        result = await make_service(remote).analyze_player(
            FAKER, "kr", lambda state, message: progress.append((state, message))
        )

        assert result.riot_id == "Faker#KR1"
        assert result.player_stats.tier == Tier.GOLD
        assert result.player_stats.division == "II"
        assert result.matches_analyzed == 70
        assert len(result.recent_matches) == 10
        assert result.recent_matches[0].match_id == "KR_0"

        assert result.boosting_flags.flash_position_changed is True
        assert result.boosting_flags.flash_change_count == 6
        assert result.boosting_flags.suspicious_winrate_spike is False
        assert result.performance_flags.is_feeding is True
        assert result.performance_flags.poor_kda is False
        assert result.risk_score >= 20
        assert result.risk_score == 80

        assert [state for state, _ in progress] == [
            AnalysisState.SEARCHING,
            AnalysisState.FETCHING_HISTORY,
            AnalysisState.ANALYZING,
            AnalysisState.DONE,
        ]
        assert progress[-1][1] == "success (70 matches, risk: 80)"

    @pytest.mark.asyncio
    async def test_requests_history_count(self):
        """Test the history lookup asks for the configured number of matches."""
        remote = FakeOpgg(summoner=gold_summoner(), history=flash_swapping_history())

        await make_service(remote).analyze_player(FAKER, "kr")

        history_calls = [params for name, params in remote.calls if name == GAME_HISTORY_TOOL]
        assert history_calls[0]["count"] == 70
        assert history_calls[0]["region"] == "KR"

    @pytest.mark.asyncio
    async def test_identity_region_wins(self):
        """Test a player's own region overrides the lobby region."""
        remote = FakeOpgg(summoner=gold_summoner(), history=flash_swapping_history())
        identity = PlayerIdentity(display_name="Faker", tag_line="KR1", region="euw1")

        result = await make_service(remote).analyze_player(identity, "kr")

        assert remote.calls[0][1]["region"] == "EUW"
        assert result.player_stats.region.value == "euw"

    @pytest.mark.asyncio
    async def test_player_not_found(self):
        """Test an unparseable profile is reported as not found."""
        remote = FakeOpgg(summoner={"message": "No summoner"})

        with pytest.raises(PlayerNotFoundError):
            await make_service(remote).analyze_player(FAKER, "kr")

        assert all(name == SUMMONER_SEARCH_TOOL for name, _ in remote.calls)

    @pytest.mark.asyncio
    async def test_empty_history_is_valid(self):
        """Test a found profile without matches still produces a result."""
        remote = FakeOpgg(summoner=gold_summoner(), history=None)

        result = await make_service(remote).analyze_player(FAKER, "kr")

        assert result.matches_analyzed == 0
        assert result.recent_matches == []
        assert result.risk_score == 0

    @pytest.mark.asyncio
    async def test_stage_timeout(self):
        """Test a slow lookup stage raises RequestTimeoutError."""
        remote = FakeOpgg(summoner=gold_summoner(), delay=1)

        with pytest.raises(RequestTimeoutError) as exc_info:
            await make_service(remote, request_timeout=0.05).analyze_player(FAKER, "kr")

        assert "OP.GG summoner search timeout after 50ms" in str(exc_info.value)
