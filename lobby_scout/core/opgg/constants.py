"""OP.GG MCP constants and region helpers."""

from typing import Dict, Optional, Union

from ..enums import Region

SUMMONER_SEARCH_TOOL = "lol-summoner-search"
GAME_HISTORY_TOOL = "lol-summoner-game-history"

FLASH_SPELL_ID = 4

# Platform and web-region codes reported by the game client
REGION_ALIASES: Dict[str, Region] = {
    "na1": Region.NA,
    "euw1": Region.EUW,
    "eun1": Region.EUNE,
    "jp1": Region.JP,
    "br1": Region.BR,
    "la1": Region.LAN,
    "la2": Region.LAS,
    "oc1": Region.OCE,
    "tr1": Region.TR,
    "sg2": Region.SG,
    "ph2": Region.PH,
    "tw2": Region.TW,
    "vn2": Region.VN,
    "th2": Region.TH,
}


def normalize_region(
    value: Optional[Union[str, Region]], default: Region = Region.NA
) -> Region:
    """
    Normalize a region code to one of the supported slugs.

    Accepts slugs in any case, platform codes like ``EUW1`` and web regions
    like ``SG2``. Unrecognized input falls back to ``default``.
    """
    if isinstance(value, Region):
        return value
    if not value:
        return default

    key = str(value).strip().lower()
    try:
        return Region(key)
    except ValueError:
        return REGION_ALIASES.get(key, default)
