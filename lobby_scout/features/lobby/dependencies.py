"""Wiring for the lobby feature.

Builds the shared transport and injects it into the player and lobby services.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from lobby_scout.core.config import Settings, get_global_settings
from lobby_scout.core.opgg import OpggMCPClient, RequestSpacer, TTLCache, Transport
from lobby_scout.features.player_analysis import (
    MatchHistoryAggregator,
    PlayerAnalysisService,
    ResponseNormalizer,
)
from lobby_scout.protocols import RemoteCall
from .service import LobbyAnalysisService


def build_transport(remote_call: RemoteCall, settings: Settings) -> Transport:
    """Get a transport configured from settings."""
    return Transport(
        remote_call,
        cache=TTLCache(maxsize=settings.cache_maxsize, ttl=settings.cache_ttl),
        spacer=RequestSpacer(spacing=settings.request_spacing),
        timeout=settings.request_timeout,
    )


def build_lobby_service(
    remote_call: RemoteCall, settings: Optional[Settings] = None
) -> LobbyAnalysisService:
    """Get a lobby analysis service around a remote call primitive."""
    settings = settings or get_global_settings()
    normalizer = ResponseNormalizer(
        build_transport(remote_call, settings),
        aggregator=MatchHistoryAggregator(
            sort_by_timestamp=settings.sort_history_by_timestamp
        ),
    )
    return LobbyAnalysisService(
        PlayerAnalysisService(normalizer, settings=settings),
        settings=settings,
    )


@asynccontextmanager
async def lobby_service(
    settings: Optional[Settings] = None,
) -> AsyncGenerator[LobbyAnalysisService, None]:
    """Get a lobby analysis service backed by the OP.GG MCP client."""
    settings = settings or get_global_settings()
    client = OpggMCPClient(
        base_url=settings.opgg_mcp_url, timeout=settings.request_timeout
    )
    await client.start_session()
    try:
        yield build_lobby_service(client, settings)
    finally:
        await client.close()


__all__ = ["build_transport", "build_lobby_service", "lobby_service"]
