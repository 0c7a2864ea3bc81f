"""
Tests for match history aggregation.
"""

from lobby_scout.features.player_analysis.aggregator import (
    MatchHistoryAggregator,
    parse_timestamp_ms,
)
from lobby_scout.features.player_analysis.schemas import PlayerIdentity
from lobby_scout.tests.payloads import FLASH, IGNITE, participant

FAKER = PlayerIdentity(display_name="Faker", tag_line="KR1")


def entry(match_id, participants, created_at=""):
    return {
        "id": match_id,
        "created_at": created_at,
        "game_type": "SOLORANKED",
        "game_length_second": 1800,
        "participants": participants,
    }


class TestParseTimestamp:
    """Test cases for timestamp parsing."""

    def test_epoch_millis(self):
        assert parse_timestamp_ms(1700000000000) == 1700000000000
        assert parse_timestamp_ms("1700000000000") == 1700000000000

    def test_iso_string(self):
        assert parse_timestamp_ms("2023-11-14T22:13:20Z") == 1700000000000
        assert parse_timestamp_ms("2023-11-14T22:13:20+00:00") == 1700000000000

    def test_unknown(self):
        assert parse_timestamp_ms(None) == 0
        assert parse_timestamp_ms("yesterday") == 0


class TestMatchHistoryAggregator:
    """Test cases for MatchHistoryAggregator."""

    def test_player_found_among_participants(self):
        """Test the player's own participant entry is extracted."""
        entries = [
            entry(
                "KR_1",
                [
                    participant("Chovy", "KR2", spells=[IGNITE, FLASH], kills=9),
                    participant("FAKER", "kr1", kills=7, deaths=3, assists=5, win=False),
                ],
            )
        ]

        history = MatchHistoryAggregator().build_history(entries, FAKER, 10)

        assert len(history) == 1
        match = history[0]
        assert match.match_id == "KR_1"
        assert match.kills == 7
        assert match.deaths == 3
        assert match.assists == 5
        assert match.win is False
        assert match.summoner_spell_a == FLASH
        assert match.minions_killed == 170
        assert match.duration_seconds == 1800

    def test_match_without_player_skipped(self):
        """Test matches the player is not part of contribute nothing."""
        entries = [
            entry("KR_1", [participant("Chovy", "KR2")]),
            entry("KR_2", [participant("Faker", "KR1")]),
        ]

        history = MatchHistoryAggregator().build_history(entries, FAKER, 10)

        assert [m.match_id for m in history] == ["KR_2"]

    def test_direct_entries(self):
        """Test flat, player-centric entries are read directly."""
        entries = [
            {
                "matchId": "KR_9",
                "kills": 5,
                "deaths": 0,
                "assists": 3,
                "win": True,
                "summoner1Id": IGNITE,
                "summoner2Id": FLASH,
                "visionScore": 31.5,
                "totalMinionsKilled": 201,
            }
        ]

        history = MatchHistoryAggregator().build_history(entries, FAKER, 10)

        assert history[0].match_id == "KR_9"
        assert history[0].kda == 8.0
        assert history[0].summoner_spell_b == FLASH
        assert history[0].vision_score == 31.5
        assert history[0].minions_killed == 201

    def test_count_caps_history(self):
        """Test no more than count records are returned."""
        entries = [entry(f"KR_{i}", [participant("Faker", "KR1")]) for i in range(10)]

        history = MatchHistoryAggregator().build_history(entries, FAKER, 3)

        assert [m.match_id for m in history] == ["KR_0", "KR_1", "KR_2"]

    def test_upstream_order_kept(self):
        """Test upstream order is kept unless sorting is enabled."""
        entries = [
            entry("old", [participant("Faker", "KR1")], created_at=1000),
            entry("new", [participant("Faker", "KR1")], created_at=2000),
        ]

        kept = MatchHistoryAggregator().build_history(entries, FAKER, 10)
        sorted_history = MatchHistoryAggregator(sort_by_timestamp=True).build_history(
            entries, FAKER, 10
        )

        assert [m.match_id for m in kept] == ["old", "new"]
        assert [m.match_id for m in sorted_history] == ["new", "old"]

    def test_malformed_participants_skipped(self):
        """Test entries with undecodable participants are skipped."""
        entries = [
            entry("bad", "{not json"),
            entry("good", [participant("Faker", "KR1")]),
        ]

        history = MatchHistoryAggregator().build_history(entries, FAKER, 10)

        assert [m.match_id for m in history] == ["good"]

    def test_only_first_count_entries_considered(self):
        """Test entries without the player shorten the history."""
        entries = [
            entry("KR_0", [participant("Chovy", "KR2")]),
            entry("KR_1", [participant("Faker", "KR1")]),
            entry("KR_2", [participant("Faker", "KR1")]),
        ]

        history = MatchHistoryAggregator().build_history(entries, FAKER, 2)

        assert [m.match_id for m in history] == ["KR_1"]

    def test_overflowing_stats_do_not_drop_history(self):
        """Test an overflowing stat falls back to zero and other matches survive."""
        entries = [
            entry("KR_1", [participant("Faker", "KR1", kills="1e400")], created_at=float("inf")),
            entry("KR_2", [participant("Faker", "KR1", kills=4)]),
        ]

        history = MatchHistoryAggregator().build_history(entries, FAKER, 10)

        assert [m.match_id for m in history] == ["KR_1", "KR_2"]
        assert history[0].kills == 0
        assert history[0].created_at_epoch == 0
        assert history[1].kills == 4

    def test_non_finite_timestamps(self):
        assert parse_timestamp_ms(float("inf")) == 0
        assert parse_timestamp_ms(float("nan")) == 0
