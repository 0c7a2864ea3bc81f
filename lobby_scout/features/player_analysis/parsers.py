"""
Parsing strategies for OP.GG MCP payloads.

The aggregator does not commit to a response shape. The same tool may answer
with a directly typed object, with a ``{headers, rows}`` table serialized
inside an MCP ``content[].text`` wrapper, or with a nested ``content``/``data``
structure. Each strategy below is a pure function that either recognizes its
shape and returns a parsed value or returns ``None``; callers evaluate them in
priority order and keep the first usable result.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import structlog

from lobby_scout.core.enums import Region, Tier
from .schemas import PlayerIdentity, PlayerStats

logger = structlog.get_logger(__name__)

# Errors a strategy may hit on an unexpected shape; they mean "not my shape"
PARSE_ERRORS = (ValueError, TypeError, KeyError, AttributeError, IndexError, OverflowError)

UNRANKED_MARKERS = frozenset({"", "NA", "NONE"})
ROMAN_DIVISIONS = {1: "I", 2: "II", 3: "III", 4: "IV"}
SUMMONER_MARKERS = ("tier", "rank", "level")

SummonerStrategy = Callable[[Any, PlayerIdentity, Region], Optional[PlayerStats]]
EntryStrategy = Callable[[Any], Optional[List[Dict[str, Any]]]]


@dataclass(frozen=True)
class McpTable:
    """Tabular payload: column names plus positional rows."""

    headers: List[str]
    rows: List[List[Any]]

    def index(self, column: str) -> int:
        """Position of a column, -1 when absent."""
        try:
            return self.headers.index(column)
        except ValueError:
            return -1

    def records(self) -> List[Dict[str, Any]]:
        """Rows as dictionaries keyed by column name."""
        return [
            {h: row[i] for i, h in enumerate(self.headers) if i < len(row)}
            for row in self.rows
            if isinstance(row, (list, tuple))
        ]


# Field helpers


def pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First value under ``keys`` that is neither None nor an empty string."""
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return default


def to_int(value: Any, default: int = 0) -> int:
    """Lenient integer conversion for upstream numbers and numeric strings."""
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def to_float(value: Any, default: float = 0.0) -> float:
    """Lenient float conversion for upstream numbers and numeric strings."""
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def decode_json_field(value: Any) -> Any:
    """Decode a JSON-encoded column value, passing decoded values through."""
    if isinstance(value, (str, bytes, bytearray)):
        return json.loads(value)
    return value


def normalize_tier(raw: Any) -> Tier:
    """Upper-case a tier string; empty, NA, NONE and unknown tiers become UNRANKED."""
    text = str(raw if raw is not None else "").strip().upper()
    if text in UNRANKED_MARKERS:
        return Tier.UNRANKED
    try:
        return Tier(text)
    except ValueError:
        logger.debug("Unknown tier collapsed to UNRANKED", raw_tier=raw)
        return Tier.UNRANKED


def normalize_division(raw: Any) -> str:
    """Map a division to a roman numeral I-IV, or empty when absent."""
    if raw is None or isinstance(raw, bool):
        return ""
    if isinstance(raw, float):
        return ROMAN_DIVISIONS.get(int(raw), "") if math.isfinite(raw) else ""
    if isinstance(raw, int):
        return ROMAN_DIVISIONS.get(raw, "")

    text = str(raw).strip().upper()
    if text.isdecimal():
        return ROMAN_DIVISIONS.get(int(text), "")
    return text if text in ROMAN_DIVISIONS.values() else ""


# MCP table


def parse_mcp_table(payload: Any) -> Optional[McpTable]:
    """
    Extract the first ``{headers, rows}`` table from an MCP payload.

    MCP tool results look like ``{"content": [{"type": "text", "text": "<json>"}]}``;
    the first text item holding a JSON table wins. A bare table dict is
    accepted as well.
    """
    if not isinstance(payload, dict):
        return None

    if isinstance(payload.get("headers"), list) and isinstance(payload.get("rows"), list):
        return McpTable(headers=payload["headers"], rows=payload["rows"])

    content = payload.get("content")
    if not isinstance(content, list):
        return None

    for item in content:
        if not (
            isinstance(item, dict)
            and item.get("type") == "text"
            and isinstance(item.get("text"), str)
        ):
            continue
        try:
            parsed = json.loads(item["text"])
        except ValueError:
            continue
        if (
            isinstance(parsed, dict)
            and isinstance(parsed.get("headers"), list)
            and isinstance(parsed.get("rows"), list)
        ):
            return McpTable(headers=parsed["headers"], rows=parsed["rows"])

    return None


# Summoner strategies


def _has_summoner_markers(data: Any) -> bool:
    return isinstance(data, dict) and any(data.get(k) for k in SUMMONER_MARKERS)


def parse_direct_summoner(
    payload: Any, identity: PlayerIdentity, region: Region
) -> Optional[PlayerStats]:
    """Payload is already a profile object carrying tier, rank or level."""
    if not _has_summoner_markers(payload):
        return None

    try:
        return PlayerStats(
            display_name=identity.display_name,
            tag_line=identity.tag_line,
            region=region,
            tier=normalize_tier(pick(payload, "tier", "rank", default="UNRANKED")),
            division=normalize_division(pick(payload, "division", "rank_division")),
            league_points=to_int(pick(payload, "lp", "leaguePoints", "league_points")),
            wins=to_int(payload.get("wins")),
            losses=to_int(payload.get("losses")),
            account_level=to_int(
                pick(payload, "level", "summonerLevel", "summoner_level"), default=1
            ),
            profile_icon_id=to_int(pick(payload, "profileIconId", "profile_icon_id")),
        )
    except PARSE_ERRORS as e:
        logger.debug("Direct summoner payload rejected", error=str(e))
        return None


def _solo_queue_entry(league_stats: Any) -> Optional[Dict[str, Any]]:
    leagues = decode_json_field(league_stats)
    if not isinstance(leagues, list):
        return None
    for entry in leagues:
        if isinstance(entry, dict) and "SOLORANKED" in str(
            entry.get("game_type") or ""
        ).upper():
            return entry
    return None


def parse_table_summoner(
    payload: Any, identity: PlayerIdentity, region: Region
) -> Optional[PlayerStats]:
    """Payload holds a summoner table with ``game_name``/``tagline`` columns."""
    table = parse_mcp_table(payload)
    if table is None:
        return None

    i_name = table.index("game_name")
    i_tag = table.index("tagline")
    if i_name == -1 or i_tag == -1:
        logger.debug("Summoner table missing required columns", headers=table.headers)
        return None

    rows = [r for r in table.rows if isinstance(r, (list, tuple)) and len(r) > max(i_name, i_tag)]
    if not rows:
        return None

    # Search may return near matches; prefer the exact Riot ID
    row = next((r for r in rows if identity.matches(r[i_name], r[i_tag])), rows[0])

    i_level = table.index("level")
    i_league = table.index("league_stats")
    level = to_int(row[i_level], default=1) if 0 <= i_level < len(row) else 1

    tier, division, lp, wins, losses = Tier.UNRANKED, "", 0, 0, 0
    if 0 <= i_league < len(row):
        try:
            solo = _solo_queue_entry(row[i_league])
            if solo is not None:
                info = solo.get("tier_info")
                if not isinstance(info, dict):
                    info = {}
                tier = normalize_tier(info.get("tier"))
                division = normalize_division(info.get("division"))
                lp = to_int(info.get("lp"))
                wins = to_int(solo.get("win"))
                losses = to_int(solo.get("lose"))
        except PARSE_ERRORS as e:
            logger.debug("Unreadable league_stats column", error=str(e))
            tier, division, lp, wins, losses = Tier.UNRANKED, "", 0, 0, 0

    try:
        return PlayerStats(
            display_name=identity.display_name,
            tag_line=identity.tag_line,
            region=region,
            tier=tier,
            division=division,
            league_points=lp,
            wins=wins,
            losses=losses,
            account_level=level or 1,
        )
    except PARSE_ERRORS as e:
        logger.debug("Summoner table row rejected", error=str(e))
        return None


def parse_nested_summoner(
    payload: Any, identity: PlayerIdentity, region: Region
) -> Optional[PlayerStats]:
    """Profile object wrapped in a ``content`` or ``data`` field."""
    if not isinstance(payload, dict):
        return None

    nested = payload.get("content") or payload.get("data")
    if isinstance(nested, list):
        for item in nested:
            if _has_summoner_markers(item):
                return parse_direct_summoner(item, identity, region)
        return None
    if isinstance(nested, dict):
        return parse_direct_summoner(nested, identity, region)
    return None


SUMMONER_STRATEGIES: Sequence[SummonerStrategy] = (
    parse_direct_summoner,
    parse_table_summoner,
    parse_nested_summoner,
)


# Match entry strategies


def _dict_items(items: Any) -> Optional[List[Dict[str, Any]]]:
    if not isinstance(items, list):
        return None
    return [item for item in items if isinstance(item, dict)]


def extract_direct_entries(payload: Any) -> Optional[List[Dict[str, Any]]]:
    """Payload is a bare list of matches."""
    return _dict_items(payload)


def extract_table_entries(payload: Any) -> Optional[List[Dict[str, Any]]]:
    """Payload holds a match table with a JSON ``participants`` column."""
    table = parse_mcp_table(payload)
    if table is None or table.index("participants") == -1:
        return None

    entries = []
    for record in table.records():
        try:
            record["participants"] = decode_json_field(record.get("participants"))
        except PARSE_ERRORS as e:
            logger.debug("Unreadable participants column", match_id=record.get("id"), error=str(e))
            record["participants"] = []
        entries.append(record)
    return entries


def extract_content_entries(payload: Any) -> Optional[List[Dict[str, Any]]]:
    """Matches listed under ``content``."""
    return _dict_items(payload.get("content")) if isinstance(payload, dict) else None


def extract_data_entries(payload: Any) -> Optional[List[Dict[str, Any]]]:
    """Matches listed under ``data``."""
    return _dict_items(payload.get("data")) if isinstance(payload, dict) else None


def extract_matches_entries(payload: Any) -> Optional[List[Dict[str, Any]]]:
    """Matches listed under ``matches``."""
    return _dict_items(payload.get("matches")) if isinstance(payload, dict) else None


MATCH_ENTRY_STRATEGIES: Sequence[EntryStrategy] = (
    extract_direct_entries,
    extract_table_entries,
    extract_content_entries,
    extract_data_entries,
    extract_matches_entries,
)
