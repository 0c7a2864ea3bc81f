"""Single entry point for remote calls: response cache, request spacing and timeouts."""

import asyncio
from typing import Any, Dict, Optional

import structlog

from ...protocols import RemoteCall
from .cache import TTLCache, make_cache_key
from .errors import OpggAPIError, RequestTimeoutError, TransportFailure
from .rate_limiter import RequestSpacer

logger = structlog.get_logger(__name__)


class Transport:
    """Issues remote calls through a shared cache and request spacer.

    Every component that needs upstream data goes through ``request``; the
    remote primitive is never called directly.
    """

    def __init__(
        self,
        remote_call: RemoteCall,
        cache: Optional[TTLCache] = None,
        spacer: Optional[RequestSpacer] = None,
        timeout: float = 15.0,
    ):
        """
        Initialize transport.

        Args:
            remote_call: Collaborator primitive invoking a named remote function
            cache: Response cache (a fresh 5 minute cache if None)
            spacer: Outbound request spacer (1 second spacing if None)
            timeout: Default per-call timeout in seconds
        """
        self.remote_call = remote_call
        self.cache = cache if cache is not None else TTLCache(maxsize=1000, ttl=300)
        self.spacer = spacer if spacer is not None else RequestSpacer(spacing=1.0)
        self.timeout = timeout
        self.calls_made = 0

    async def request(
        self,
        endpoint: str,
        params: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Call a remote function, serving repeated calls from cache.

        Args:
            endpoint: Remote function name
            params: Parameter object sent to the function
            timeout: Seconds to wait for the response (default: transport timeout)

        Returns:
            Raw payload returned by the remote function

        Raises:
            RequestTimeoutError: If no response arrived in time
            TransportFailure: If the remote call errored
        """
        key = make_cache_key(endpoint, params)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        await self.spacer.wait_if_needed()

        bound = timeout if timeout is not None else self.timeout
        self.calls_made += 1
        try:
            payload = await asyncio.wait_for(
                self.remote_call(endpoint, params), timeout=bound
            )
        except asyncio.TimeoutError as e:
            logger.warning("Remote call timed out", endpoint=endpoint, timeout=bound)
            raise RequestTimeoutError(
                f"{endpoint} timeout after {bound:g}s"
            ) from e
        except OpggAPIError:
            raise
        except Exception as e:
            logger.warning(
                "Remote call failed",
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportFailure(f"{endpoint} failed: {e}") from e

        if payload is not None:
            self.cache.set(key, payload)
        return payload
