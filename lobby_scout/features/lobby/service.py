"""
Lobby orchestration.

Analyzes a champion select roster one player at a time. Each player's
progress, result or failure is emitted as a ``LobbyEvent`` while the analysis
runs; a failing player is reported and skipped, never aborting the batch.
"""

import asyncio
from contextlib import aclosing
from typing import AsyncIterator, Awaitable, Callable, List, Optional, Sequence, Union

import structlog

from lobby_scout.core.config import Settings, get_global_settings
from lobby_scout.core.enums import AnalysisState, LobbyEventKind, Region
from lobby_scout.core.opgg import OpggAPIError, RequestTimeoutError, normalize_region
from lobby_scout.features.player_analysis.schemas import AnalysisResult, PlayerIdentity
from lobby_scout.features.player_analysis.service import PlayerAnalysisService
from lobby_scout.protocols import ProgressCallback
from .schemas import LobbyEvent

logger = structlog.get_logger(__name__)


class LobbyAnalysisService:
    """Drives per-player analysis sequentially across a lobby roster."""

    def __init__(
        self,
        analysis_service: PlayerAnalysisService,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize lobby analysis service.

        :param analysis_service: Service analyzing a single player
        :param settings: Engine settings (global settings if None)
        :param sleep: Coroutine used for the delay between players
        """
        self.analysis_service = analysis_service
        self.settings = settings or get_global_settings()
        self._sleep = sleep

    @property
    def player_delay(self) -> float:
        """Pause between two players, equal to the transport request spacing."""
        return self.settings.request_spacing

    async def stream_lobby(
        self,
        identities: Sequence[PlayerIdentity],
        region: Union[Region, str, None] = None,
    ) -> AsyncIterator[LobbyEvent]:
        """
        Analyze players in input order, yielding events as they happen.

        Closing the stream early cancels the player currently being analyzed.
        """
        lobby_region = normalize_region(
            region, default=normalize_region(self.settings.default_region)
        )
        logger.info(
            "Starting lobby analysis",
            players=len(identities),
            region=lobby_region.value,
        )

        for index, identity in enumerate(identities):
            if index > 0 and self.player_delay > 0:
                await self._sleep(self.player_delay)
            async with aclosing(self._stream_player(identity, lobby_region)) as events:
                async for event in events:
                    yield event

    async def analyze_lobby(
        self,
        identities: Sequence[PlayerIdentity],
        region: Union[Region, str, None] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[AnalysisResult]:
        """
        Analyze a lobby and collect the results.

        :param identities: Roster in the order it should be processed
        :param region: Lobby region slug
        :param on_progress: Receives ``(name#tag, message)`` progress lines
        :returns: Results of the players that could be analyzed, in input order
        """
        results: List[AnalysisResult] = []
        failures = 0

        async for event in self.stream_lobby(identities, region):
            if event.kind == LobbyEventKind.RESULT and event.result is not None:
                results.append(event.result)
                continue
            if event.kind == LobbyEventKind.FAILED:
                failures += 1
            if on_progress is not None and event.message:
                on_progress(event.player_key, event.message)

        logger.info(
            "Lobby analysis completed",
            requested=len(identities),
            analyzed=len(results),
            failed=failures,
        )
        return results

    async def _stream_player(
        self, identity: PlayerIdentity, region: Region
    ) -> AsyncIterator[LobbyEvent]:
        key = identity.riot_id
        queue: asyncio.Queue[LobbyEvent] = asyncio.Queue()

        def report(state: AnalysisState, message: str) -> None:
            queue.put_nowait(
                LobbyEvent(
                    kind=LobbyEventKind.PROGRESS,
                    player_key=key,
                    state=state,
                    message=message,
                )
            )

        task = asyncio.ensure_future(self._analyze_with_timeout(identity, region, report))
        getter: Optional[asyncio.Future] = None
        try:
            while True:
                getter = asyncio.ensure_future(queue.get())
                done, _ = await asyncio.wait(
                    {task, getter}, return_when=asyncio.FIRST_COMPLETED
                )
                if getter not in done:
                    break
                yield getter.result()

            while not queue.empty():
                yield queue.get_nowait()
        finally:
            if getter is not None and not getter.done():
                getter.cancel()
            if not task.done():
                task.cancel()

        yield self._outcome_event(key, task)

    def _outcome_event(self, key: str, task: "asyncio.Future[AnalysisResult]") -> LobbyEvent:
        log = logger.bind(player=key)
        try:
            result = task.result()
        except OpggAPIError as e:
            log.warning(
                "Player analysis failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._failure_event(key, e)
        except Exception as e:
            log.exception("Unexpected error during player analysis")
            return self._failure_event(key, e)

        return LobbyEvent(
            kind=LobbyEventKind.RESULT,
            player_key=key,
            state=AnalysisState.DONE,
            result=result,
        )

    @staticmethod
    def _failure_event(key: str, error: Exception) -> LobbyEvent:
        return LobbyEvent(
            kind=LobbyEventKind.FAILED,
            player_key=key,
            state=AnalysisState.FAILED,
            message=f"failed - {error}",
            error_type=type(error).__name__,
        )

    async def _analyze_with_timeout(
        self,
        identity: PlayerIdentity,
        region: Region,
        report: Callable[[AnalysisState, str], None],
    ) -> AnalysisResult:
        timeout = self.settings.player_timeout
        try:
            return await asyncio.wait_for(
                self.analysis_service.analyze_player(identity, region, report),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"{identity.riot_id} analysis timeout after {timeout:g}s"
            ) from e
