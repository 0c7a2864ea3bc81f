"""
Response normalization for OP.GG summoner and match history lookups.

The upstream accepts exactly one, undocumented, parameter encoding for a
Riot ID and answers in one of several payload shapes. ``ResponseNormalizer``
tries each encoding in order and runs every payload through the ordered
parser strategies until something usable comes back.
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar

import structlog

from lobby_scout.core.enums import Region
from lobby_scout.core.opgg import (
    GAME_HISTORY_TOOL,
    SUMMONER_SEARCH_TOOL,
    OpggAPIError,
    Transport,
)
from .aggregator import MatchHistoryAggregator
from .parsers import MATCH_ENTRY_STRATEGIES, PARSE_ERRORS, SUMMONER_STRATEGIES
from .schemas import MatchRecord, PlayerIdentity, PlayerStats

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _require_identity(identity: Optional[PlayerIdentity]) -> PlayerIdentity:
    if identity is None:
        raise ValueError("A player identity is required for normalization")
    return identity


def normalize_summoner(
    payload: Any,
    identity: PlayerIdentity,
    region: Region = Region.NA,
) -> Optional[PlayerStats]:
    """
    Extract a ranked profile from an unknown-shaped payload.

    :returns: PlayerStats from the first strategy that recognizes the payload,
        None when no strategy does
    :raises ValueError: If identity is missing
    """
    identity = _require_identity(identity)
    if payload is None:
        return None

    for strategy in SUMMONER_STRATEGIES:
        try:
            stats = strategy(payload, identity, region)
        except PARSE_ERRORS as e:
            logger.debug("Summoner strategy failed", strategy=strategy.__name__, error=str(e))
            continue
        if stats is not None:
            logger.debug("Summoner payload parsed", strategy=strategy.__name__)
            return stats
    return None


def normalize_match_history(
    payload: Any,
    identity: PlayerIdentity,
    limit: int,
    aggregator: Optional[MatchHistoryAggregator] = None,
) -> List[MatchRecord]:
    """
    Extract the player's match records from an unknown-shaped payload.

    :returns: Records from the first strategy yielding any, else an empty list
    :raises ValueError: If identity is missing
    """
    identity = _require_identity(identity)
    if payload is None or limit <= 0:
        return []

    aggregator = aggregator or MatchHistoryAggregator()
    for strategy in MATCH_ENTRY_STRATEGIES:
        try:
            entries = strategy(payload)
        except PARSE_ERRORS as e:
            logger.debug("Match entry strategy failed", strategy=strategy.__name__, error=str(e))
            continue
        if not entries:
            continue
        history = aggregator.build_history(entries, identity, limit)
        if history:
            logger.debug(
                "Match history payload parsed",
                strategy=strategy.__name__,
                matches=len(history),
            )
            return history
    return []


def summoner_search_encodings(identity: PlayerIdentity, region: Region) -> List[Dict[str, Any]]:
    """Parameter encodings for the summoner search, in priority order."""
    upstream_region = region.value.upper()
    return [
        {"game_name": identity.display_name, "tag_line": identity.tag_line, "region": upstream_region},
        {"gameName": identity.display_name, "gameTag": identity.tag_line, "region": upstream_region},
        {"riotId": identity.riot_id, "region": upstream_region},
        {"summoner": identity.display_name, "tag": identity.tag_line, "region": upstream_region},
    ]


def game_history_encodings(
    identity: PlayerIdentity, region: Region, count: int
) -> List[Dict[str, Any]]:
    """Parameter encodings for the game history lookup, in priority order."""
    upstream_region = region.value.upper()
    return [
        {
            "game_name": identity.display_name,
            "tag_line": identity.tag_line,
            "region": upstream_region,
            "count": count,
        },
        {
            "gameName": identity.display_name,
            "gameTag": identity.tag_line,
            "region": upstream_region,
            "limit": count,
        },
        {"riotId": identity.riot_id, "region": upstream_region, "count": count},
        {
            "summoner": identity.display_name,
            "tag": identity.tag_line,
            "region": upstream_region,
            "games": count,
        },
    ]


class ResponseNormalizer:
    """Fetches and normalizes summoner profiles and match histories."""

    def __init__(
        self,
        transport: Transport,
        aggregator: Optional[MatchHistoryAggregator] = None,
    ):
        self.transport = transport
        self.aggregator = aggregator or MatchHistoryAggregator()

    async def search_summoner(
        self, identity: PlayerIdentity, region: Region
    ) -> Optional[PlayerStats]:
        """
        Look up a ranked profile, trying each parameter encoding in turn.

        :returns: PlayerStats, or None when responses arrived but none parsed
        :raises OpggAPIError: The last transport error when every encoding failed
        """
        identity = _require_identity(identity)
        return await self._first_parsed(
            SUMMONER_SEARCH_TOOL,
            summoner_search_encodings(identity, region),
            lambda payload: normalize_summoner(payload, identity, region),
            identity,
        )

    async def fetch_match_history(
        self, identity: PlayerIdentity, region: Region, count: int
    ) -> List[MatchRecord]:
        """
        Fetch up to ``count`` matches, trying each parameter encoding in turn.

        :returns: Match records, most recent first; empty when nothing parsed
        :raises OpggAPIError: The last transport error when every encoding failed
        """
        identity = _require_identity(identity)
        history = await self._first_parsed(
            GAME_HISTORY_TOOL,
            game_history_encodings(identity, region, count),
            lambda payload: normalize_match_history(
                payload, identity, count, self.aggregator
            ),
            identity,
        )
        return history or []

    async def _first_parsed(
        self,
        endpoint: str,
        encodings: List[Dict[str, Any]],
        parse: Callable[[Any], Optional[T]],
        identity: PlayerIdentity,
    ) -> Optional[T]:
        last_error: Optional[OpggAPIError] = None
        responded = False

        for index, params in enumerate(encodings, start=1):
            try:
                payload = await self.transport.request(endpoint, params)
            except OpggAPIError as e:
                logger.debug(
                    "Parameter encoding failed",
                    endpoint=endpoint,
                    encoding=index,
                    player=identity.riot_id,
                    error=str(e),
                )
                last_error = e
                continue

            responded = True
            parsed = parse(payload)
            if parsed:
                logger.debug(
                    "Parameter encoding accepted",
                    endpoint=endpoint,
                    encoding=index,
                    player=identity.riot_id,
                )
                return parsed

        if last_error is not None and not responded:
            raise last_error

        logger.info(
            "No parseable response from any parameter encoding",
            endpoint=endpoint,
            player=identity.riot_id,
            attempts=len(encodings),
        )
        return None
