"""Protocol definitions for the collaborator-facing seams of the engine."""

from typing import Any, Dict, Protocol

from .core.enums import AnalysisState


class RemoteCall(Protocol):
    """Invoke a named remote function with a parameter object.

    Returns a JSON-shaped payload or raises.
    """

    async def __call__(self, function_name: str, params: Dict[str, Any]) -> Any: ...


class ProgressReporter(Protocol):
    """Receives state changes of a single player's analysis."""

    def __call__(self, state: AnalysisState, message: str) -> None: ...


class ProgressCallback(Protocol):
    """Receives human-readable progress lines keyed by ``name#tag``."""

    def __call__(self, player_key: str, message: str) -> None: ...
