"""Request spacing for the OP.GG MCP endpoint."""

import asyncio
import time
from typing import Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)


class RequestSpacer:
    """Keeps a minimum interval between consecutive outbound requests.

    A request issued too early is delayed, never rejected.
    """

    def __init__(
        self,
        spacing: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize request spacer.

        Args:
            spacing: Minimum seconds between two outbound requests
            clock: Monotonic time source
            sleep: Coroutine used to wait, replaceable in tests
        """
        self.spacing = spacing
        self.clock = clock
        self.sleep = sleep
        self.last_request_time: float | None = None
        self.lock = asyncio.Lock()

    def wait_time(self) -> float:
        """Seconds the next request would have to wait right now."""
        if self.last_request_time is None:
            return 0.0
        elapsed = self.clock() - self.last_request_time
        return max(0.0, self.spacing - elapsed)

    async def wait_if_needed(self) -> None:
        """Wait until the next request may be sent and claim the slot."""
        async with self.lock:
            wait_time = self.wait_time()
            if wait_time > 0:
                logger.debug("Spacing outbound request", wait_time=wait_time)
                await self.sleep(wait_time)

            self.last_request_time = self.clock()
