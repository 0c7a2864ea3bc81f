"""Lobby feature: roster intake and sequential per-player analysis."""

from .schemas import LobbyEvent, ChatParticipant, ChatParticipants
from .participants import identities_from_participants
from .service import LobbyAnalysisService
from .dependencies import build_transport, build_lobby_service, lobby_service

__all__ = [
    "LobbyEvent",
    "ChatParticipant",
    "ChatParticipants",
    "identities_from_participants",
    "LobbyAnalysisService",
    "build_transport",
    "build_lobby_service",
    "lobby_service",
]
