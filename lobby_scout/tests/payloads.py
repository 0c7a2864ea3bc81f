"""Builders for OP.GG MCP payloads and match records used across tests."""

import json
from typing import Any, Dict, List, Optional

from lobby_scout.features.player_analysis.schemas import MatchRecord

FLASH = 4
IGNITE = 14

SUMMONER_HEADERS = ["game_name", "tagline", "level", "league_stats"]
HISTORY_HEADERS = ["id", "created_at", "game_type", "game_length_second", "participants"]


def mcp_text(data: Any) -> Dict[str, Any]:
    """Wrap data the way MCP tools return it: JSON inside a text content item."""
    return {"content": [{"type": "text", "text": json.dumps(data)}]}


def league_stats(tier: str, division: Any, lp: int = 0, wins: int = 0, losses: int = 0) -> str:
    return json.dumps(
        [
            {"game_type": "FLEXRANKED", "tier_info": {"tier": "SILVER", "division": 1}},
            {
                "game_type": "SOLORANKED",
                "tier_info": {"tier": tier, "division": division, "lp": lp},
                "win": wins,
                "lose": losses,
            },
        ]
    )


def summoner_table(rows: List[List[Any]]) -> Dict[str, Any]:
    return mcp_text({"headers": SUMMONER_HEADERS, "rows": rows})


def participant(
    game_name: str,
    tagline: str,
    *,
    spells: Optional[List[int]] = None,
    win: bool = True,
    kills: int = 1,
    deaths: int = 1,
    assists: int = 1,
    vision: float = 20,
    minions: int = 150,
    neutral: int = 20,
) -> Dict[str, Any]:
    return {
        "summoner": {"game_name": game_name, "tagline": tagline},
        "champion_id": 7,
        "spells": spells if spells is not None else [FLASH, IGNITE],
        "items": [3020, 6655],
        "stats": {
            "kill": kills,
            "death": deaths,
            "assist": assists,
            "result": "WIN" if win else "LOSE",
            "ward_place": 8,
            "ward_kill": 2,
            "vision_score": vision,
            "minion_kill": minions,
            "neutral_minion_kill": neutral,
            "gold_earned": 11000,
            "total_damage_dealt_to_champions": 21000,
        },
    }


def history_row(match_id: str, participants: List[Dict[str, Any]], created_at: Any = "") -> List[Any]:
    return [match_id, created_at, "SOLORANKED", 1800, json.dumps(participants)]


def history_table(rows: List[List[Any]]) -> Dict[str, Any]:
    return mcp_text({"headers": HISTORY_HEADERS, "rows": rows})


def make_match(**overrides: Any) -> MatchRecord:
    """Match record with neutral stats unless overridden."""
    fields: Dict[str, Any] = {
        "match_id": "KR_1",
        "win": True,
        "kills": 2,
        "deaths": 2,
        "assists": 2,
        "summoner_spell_a": FLASH,
        "summoner_spell_b": IGNITE,
        "vision_score": 20,
        "minions_killed": 170,
    }
    fields.update(overrides)
    return MatchRecord(**fields)
