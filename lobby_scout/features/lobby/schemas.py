"""Pydantic schemas for lobby analysis."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lobby_scout.core.enums import AnalysisState, LobbyEventKind
from lobby_scout.features.player_analysis.schemas import AnalysisResult


class LobbyEvent(BaseModel):
    """One event of a lobby analysis stream, keyed by ``name#tag``."""

    kind: LobbyEventKind
    player_key: str = Field(..., description="Riot ID in format name#tag")
    state: AnalysisState
    message: str = ""
    result: Optional[AnalysisResult] = None
    error_type: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ChatParticipant(BaseModel):
    """Participant of the game client's chat, as reported by the local client API."""

    cid: str = ""
    game_name: str = ""
    game_tag: str = ""
    muted: bool = False
    name: str = ""
    pid: str = ""
    puuid: str = ""
    region: str = ""

    model_config = ConfigDict(extra="ignore")


class ChatParticipants(BaseModel):
    """Chat participant listing."""

    participants: List[ChatParticipant] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")
