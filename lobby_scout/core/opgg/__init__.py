"""
OP.GG MCP client package.

This package provides the transport used to reach the OP.GG aggregator,
including response caching, request spacing and error handling.
"""

from .client import OpggMCPClient
from .cache import TTLCache, make_cache_key
from .rate_limiter import RequestSpacer
from .transport import Transport
from .errors import (
    OpggAPIError,
    TransportFailure,
    RequestTimeoutError,
    MalformedResponseError,
    PlayerNotFoundError,
)
from .constants import (
    SUMMONER_SEARCH_TOOL,
    GAME_HISTORY_TOOL,
    FLASH_SPELL_ID,
    normalize_region,
)

__all__ = [
    "OpggMCPClient",
    "TTLCache",
    "make_cache_key",
    "RequestSpacer",
    "Transport",
    "OpggAPIError",
    "TransportFailure",
    "RequestTimeoutError",
    "MalformedResponseError",
    "PlayerNotFoundError",
    "SUMMONER_SEARCH_TOOL",
    "GAME_HISTORY_TOOL",
    "FLASH_SPELL_ID",
    "normalize_region",
]
