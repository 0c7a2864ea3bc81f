"""
Tests for request spacing.
"""

import pytest

from lobby_scout.core.opgg.rate_limiter import RequestSpacer


class FakeTime:
    """Clock and sleep pair where sleeping advances the clock."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps = []

    def clock(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestRequestSpacer:
    """Test cases for RequestSpacer."""

    def test_initialization(self):
        """Test spacer starts without a previous request."""
        spacer = RequestSpacer(spacing=1.0)
        assert spacer.spacing == 1.0
        assert spacer.last_request_time is None
        assert spacer.wait_time() == 0.0

    @pytest.mark.asyncio
    async def test_first_request_not_delayed(self):
        """Test the first request goes out immediately."""
        fake = FakeTime()
        spacer = RequestSpacer(spacing=1.0, clock=fake.clock, sleep=fake.sleep)

        await spacer.wait_if_needed()

        assert fake.sleeps == []
        assert spacer.last_request_time == 0.0

    @pytest.mark.asyncio
    async def test_back_to_back_requests_spaced(self):
        """Test consecutive requests are at least the spacing apart."""
        fake = FakeTime()
        spacer = RequestSpacer(spacing=1.0, clock=fake.clock, sleep=fake.sleep)

        send_times = []
        for _ in range(3):
            await spacer.wait_if_needed()
            send_times.append(fake.now)

        assert send_times == [0.0, 1.0, 2.0]

    @pytest.mark.asyncio
    async def test_partial_wait(self):
        """Test only the remaining part of the spacing is waited."""
        fake = FakeTime()
        spacer = RequestSpacer(spacing=1.0, clock=fake.clock, sleep=fake.sleep)

        await spacer.wait_if_needed()
        fake.now += 0.75
        await spacer.wait_if_needed()

        assert fake.sleeps == [pytest.approx(0.25)]

    @pytest.mark.asyncio
    async def test_no_wait_after_idle(self):
        """Test no delay once the spacing has already elapsed."""
        fake = FakeTime()
        spacer = RequestSpacer(spacing=1.0, clock=fake.clock, sleep=fake.sleep)

        await spacer.wait_if_needed()
        fake.now += 5.0
        await spacer.wait_if_needed()

        assert fake.sleeps == []
