"""OP.GG MCP HTTP client speaking JSON-RPC 2.0 over httpx."""

import asyncio
import itertools
import json
from typing import Any, Dict, Optional

import httpx
import structlog

from ..config import get_global_settings
from .errors import MalformedResponseError, RequestTimeoutError, TransportFailure

logger = structlog.get_logger(__name__)


class OpggMCPClient:
    """Calls OP.GG MCP tools with ``tools/call`` requests.

    Instances are async callables matching the ``RemoteCall`` protocol, so
    they can be handed straight to a ``Transport``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize OP.GG MCP client.

        Args:
            base_url: MCP endpoint URL (uses config if None)
            timeout: Total HTTP timeout in seconds (uses config if None)
            session: Pre-built httpx client, mainly for tests
        """
        settings = get_global_settings()
        self.base_url = base_url or settings.opgg_mcp_url
        self.timeout = timeout or settings.request_timeout

        self.session = session
        self._owns_session = session is None
        self._session_lock = asyncio.Lock()
        self._request_ids = itertools.count(1)

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                        "User-Agent": "LobbyScout/1.0",
                    }
                    self.session = httpx.AsyncClient(
                        headers=headers, timeout=httpx.Timeout(self.timeout)
                    )
                    self._owns_session = True
                    logger.info("OP.GG MCP session started", base_url=self.base_url)

    async def close(self) -> None:
        """Close the httpx session if this client created it."""
        if self._owns_session and self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("OP.GG MCP session closed")

    def _build_request(self, function_name: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": "tools/call",
            "params": {"name": function_name, "arguments": params},
        }

    async def __call__(self, function_name: str, params: Dict[str, Any]) -> Any:
        """
        Invoke an MCP tool and return its ``result`` payload.

        Raises:
            RequestTimeoutError: No HTTP response within the client timeout
            TransportFailure: Network error, HTTP error status or JSON-RPC error
            MalformedResponseError: Body is not JSON or lacks result and error
        """
        await self.start_session()

        request = self._build_request(function_name, params)
        logger.debug(
            "Calling OP.GG MCP tool", function=function_name, arguments=params
        )

        try:
            response = await self.session.post(self.base_url, json=request)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request to {function_name} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportFailure(f"Network error calling {function_name}: {e}") from e

        if response.status_code >= 400:
            raise TransportFailure(
                f"HTTP error calling {function_name}",
                status_code=response.status_code,
                response_data={"body": response.text[:500]},
            )

        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise MalformedResponseError(
                f"Failed to parse response from {function_name}",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"Unexpected JSON-RPC envelope from {function_name}",
                response_data={"body": body},
            )

        if body.get("error") is not None:
            logger.warning(
                "OP.GG MCP tool returned error",
                function=function_name,
                error=body["error"],
            )
            raise TransportFailure(
                f"OP.GG API error: {body['error']}",
                response_data={"error": body["error"]},
            )

        if "result" not in body or body["result"] is None:
            raise MalformedResponseError(
                f"No result or error from {function_name}", response_data=body
            )

        return body["result"]
