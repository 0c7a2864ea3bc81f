"""Builds a player's canonical match history from parsed OP.GG match entries."""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog

from .parsers import PARSE_ERRORS, decode_json_field, pick, to_float, to_int
from .schemas import MatchRecord, PlayerIdentity

logger = structlog.get_logger(__name__)


def parse_timestamp_ms(value: Any) -> int:
    """Epoch milliseconds from a numeric timestamp or an ISO-8601 string; 0 if unknown."""
    if value is None or value == "" or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0

    text = str(value).strip()
    if text.isdecimal():
        return int(text)
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return int(moment.timestamp() * 1000)
    except (ValueError, OverflowError, OSError):
        return 0


def _participant_riot_id(participant: Dict[str, Any]) -> tuple[Any, Any]:
    summoner = participant.get("summoner")
    source = summoner if isinstance(summoner, dict) else participant
    return (
        pick(source, "game_name", "gameName", "riotIdGameName"),
        pick(source, "tagline", "tagLine", "riotIdTagline"),
    )


class MatchHistoryAggregator:
    """Turns raw match entries into an ordered ``MatchRecord`` sequence.

    Upstream already lists matches most-recent-first and that order is kept
    as-is; ``sort_by_timestamp`` re-sorts by creation time instead.
    """

    def __init__(self, sort_by_timestamp: bool = False):
        self.sort_by_timestamp = sort_by_timestamp

    def build_history(
        self,
        entries: List[Dict[str, Any]],
        identity: PlayerIdentity,
        count: int,
    ) -> List[MatchRecord]:
        """
        Convert match entries for ``identity`` into match records.

        Args:
            entries: Raw match dictionaries from a parser strategy
            identity: Player whose point of view is extracted
            count: Number of entries to consider, most recent first

        Returns:
            Records for the entries the player took part in, at most ``count``
        """
        history: List[MatchRecord] = []
        skipped = 0

        for entry in entries[:count]:
            try:
                record = self.entry_to_record(entry, identity)
            except PARSE_ERRORS as e:
                logger.debug("Failed to parse match entry", error=str(e))
                record = None
            if record is None:
                skipped += 1
                continue
            history.append(record)

        if self.sort_by_timestamp and history and all(r.created_at_epoch for r in history):
            history.sort(key=lambda r: r.created_at_epoch, reverse=True)

        logger.debug(
            "Match history built",
            player=identity.riot_id,
            entries=len(entries),
            records=len(history),
            skipped=skipped,
        )
        return history

    @classmethod
    def entry_to_record(
        cls, entry: Dict[str, Any], identity: PlayerIdentity
    ) -> Optional[MatchRecord]:
        """Record for one entry, or None when the player is not in it."""
        if not isinstance(entry, dict):
            return None

        # Entries already written from the player's point of view
        if "kills" in entry and "deaths" in entry:
            return cls.direct_match(entry)

        participants = decode_json_field(
            pick(entry, "participants", "players", default=[])
        )
        if not isinstance(participants, list):
            return None

        me = next(
            (
                p
                for p in participants
                if isinstance(p, dict) and identity.matches(*_participant_riot_id(p))
            ),
            None,
        )
        if me is None:
            return None
        return cls.participant_match(entry, me)

    @staticmethod
    def direct_match(match: Dict[str, Any]) -> MatchRecord:
        """Record from a flat, player-centric match object."""
        return MatchRecord(
            match_id=str(pick(match, "matchId", "id", default="")),
            champion_id=to_int(pick(match, "championId", "champion_id")),
            game_type=str(pick(match, "gameType", "game_type", default="")),
            win=bool(match.get("win") or match.get("victory")),
            kills=to_int(match.get("kills")),
            deaths=to_int(match.get("deaths")),
            assists=to_int(match.get("assists")),
            summoner_spell_a=to_int(pick(match, "summoner1Id", "spell1")),
            summoner_spell_b=to_int(pick(match, "summoner2Id", "spell2")),
            items=[to_int(i) for i in match.get("items") or []],
            wards_placed=to_int(pick(match, "wardsPlaced", "wards")),
            wards_killed=to_int(match.get("wardsKilled")),
            vision_score=to_float(match.get("visionScore")),
            minions_killed=to_int(pick(match, "totalMinionsKilled", "cs")),
            gold_earned=to_int(match.get("goldEarned")),
            damage_to_champions=to_int(match.get("damageDealtToChampions")),
            duration_seconds=to_int(pick(match, "gameDuration", "duration")),
            created_at_epoch=parse_timestamp_ms(pick(match, "gameCreation", "created_at")),
        )

    @staticmethod
    def participant_match(match: Dict[str, Any], participant: Dict[str, Any]) -> MatchRecord:
        """Record from a multi-participant match and the player's participant entry."""
        stats = participant.get("stats")
        if not isinstance(stats, dict):
            stats = participant
        spells = participant.get("spells") or []

        kills = to_int(pick(stats, "kill", "kills"))
        deaths = to_int(pick(stats, "death", "deaths"))
        assists = to_int(pick(stats, "assist", "assists"))
        minions = to_int(stats.get("minion_kill")) + to_int(stats.get("neutral_minion_kill"))

        return MatchRecord(
            match_id=str(pick(match, "id", "matchId", default="")),
            champion_id=to_int(pick(participant, "champion_id", "championId")),
            game_type=str(pick(match, "game_type", "gameType", default="")),
            win=str(stats.get("result") or "").upper() == "WIN" or bool(stats.get("win")),
            kills=kills,
            deaths=deaths,
            assists=assists,
            summoner_spell_a=to_int(spells[0]) if len(spells) > 0 else 0,
            summoner_spell_b=to_int(spells[1]) if len(spells) > 1 else 0,
            items=[to_int(i) for i in participant.get("items") or []],
            wards_placed=to_int(pick(stats, "ward_place", "wardsPlaced")),
            wards_killed=to_int(pick(stats, "ward_kill", "wardsKilled")),
            vision_score=to_float(pick(stats, "vision_score", "visionScore")),
            minions_killed=minions or to_int(stats.get("totalMinionsKilled")),
            gold_earned=to_int(pick(stats, "gold_earned", "goldEarned")),
            damage_to_champions=to_int(
                pick(stats, "total_damage_dealt_to_champions", "damageDealtToChampions")
            ),
            duration_seconds=to_int(pick(match, "game_length_second", "gameDuration")),
            created_at_epoch=parse_timestamp_ms(pick(match, "created_at", "gameCreation")),
        )
