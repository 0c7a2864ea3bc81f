"""
Tests for the transport layer.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from lobby_scout.core.opgg import (
    MalformedResponseError,
    RequestSpacer,
    RequestTimeoutError,
    TransportFailure,
    Transport,
    TTLCache,
)


def make_transport(remote_call, **kwargs) -> Transport:
    kwargs.setdefault("spacer", RequestSpacer(spacing=0))
    return Transport(remote_call, **kwargs)


class TestTransport:
    """Test cases for Transport."""

    @pytest.mark.asyncio
    async def test_request_returns_payload(self):
        """Test the remote payload is returned as is."""
        remote_call = AsyncMock(return_value={"data": {"summoner": {}}})
        transport = make_transport(remote_call)

        payload = await transport.request("lol-summoner-search", {"q": "Faker"})

        assert payload == {"data": {"summoner": {}}}
        remote_call.assert_awaited_once_with("lol-summoner-search", {"q": "Faker"})

    @pytest.mark.asyncio
    async def test_repeated_request_served_from_cache(self):
        """Test identical requests within the TTL reach the remote once."""
        remote_call = AsyncMock(return_value={"rows": []})
        transport = make_transport(remote_call)

        first = await transport.request("lol-summoner-game-history", {"count": 70})
        second = await transport.request("lol-summoner-game-history", {"count": 70})

        assert first == second
        assert remote_call.await_count == 1
        assert transport.calls_made == 1

    @pytest.mark.asyncio
    async def test_different_params_not_shared(self):
        """Test different parameter objects are fetched separately."""
        remote_call = AsyncMock(return_value={"rows": []})
        transport = make_transport(remote_call)

        await transport.request("lol-summoner-game-history", {"count": 70})
        await transport.request("lol-summoner-game-history", {"limit": 70})

        assert remote_call.await_count == 2

    @pytest.mark.asyncio
    async def test_expired_entry_refetched(self):
        """Test a request after the TTL reaches the remote again."""
        now = [0.0]
        cache = TTLCache(maxsize=10, ttl=300, clock=lambda: now[0])
        remote_call = AsyncMock(return_value={"ok": True})
        transport = make_transport(remote_call, cache=cache)

        await transport.request("lol-summoner-search", {"q": "Faker"})
        now[0] = 301.0
        await transport.request("lol-summoner-search", {"q": "Faker"})

        assert remote_call.await_count == 2

    @pytest.mark.asyncio
    async def test_none_payload_not_cached(self):
        """Test empty payloads are not cached."""
        remote_call = AsyncMock(return_value=None)
        transport = make_transport(remote_call)

        await transport.request("lol-summoner-search", {"q": "Faker"})
        await transport.request("lol-summoner-search", {"q": "Faker"})

        assert remote_call.await_count == 2

    @pytest.mark.asyncio
    async def test_timeout_raises_request_timeout(self):
        """Test a slow remote call raises RequestTimeoutError."""

        async def slow_call(function_name, params):
            await asyncio.sleep(10)

        transport = make_transport(slow_call, timeout=0.01)

        with pytest.raises(RequestTimeoutError) as exc_info:
            await transport.request("lol-summoner-search", {"q": "Faker"})

        assert "lol-summoner-search timeout" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_generic_error_wrapped(self):
        """Test unexpected remote errors surface as TransportFailure."""
        remote_call = AsyncMock(side_effect=ConnectionResetError("reset by peer"))
        transport = make_transport(remote_call)

        with pytest.raises(TransportFailure) as exc_info:
            await transport.request("lol-summoner-search", {"q": "Faker"})

        assert "reset by peer" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_api_error_passes_through(self):
        """Test errors from the error taxonomy are not rewrapped."""
        remote_call = AsyncMock(side_effect=MalformedResponseError("bad body"))
        transport = make_transport(remote_call)

        with pytest.raises(MalformedResponseError):
            await transport.request("lol-summoner-search", {"q": "Faker"})

    @pytest.mark.asyncio
    async def test_outbound_requests_spaced(self):
        """Test cache misses go through the request spacer."""
        now = [0.0]
        sleeps = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)
            now[0] += seconds

        spacer = RequestSpacer(spacing=1.0, clock=lambda: now[0], sleep=fake_sleep)
        remote_call = AsyncMock(return_value={"ok": True})
        transport = Transport(remote_call, spacer=spacer)

        await transport.request("lol-summoner-search", {"q": "a"})
        await transport.request("lol-summoner-search", {"q": "b"})
        await transport.request("lol-summoner-search", {"q": "a"})

        assert sleeps == [1.0]
        assert remote_call.await_count == 2
