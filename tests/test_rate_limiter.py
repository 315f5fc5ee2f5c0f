"""
Tests for the fixed-interval rate limiter.
"""

import pytest
from unittest.mock import AsyncMock, patch

from discord_mcp.utils.rate_limiter import RateLimiter


class TestRateLimiter:

    @pytest.mark.asyncio
    async def test_first_call_does_not_sleep(self):
        limiter = RateLimiter(min_interval=0.1)
        with patch("discord_mcp.utils.rate_limiter.time.monotonic", return_value=1000.0), \
                patch("discord_mcp.utils.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
            await limiter.wait()

        sleep.assert_not_called()
        assert limiter.last_request == 1000.0

    @pytest.mark.asyncio
    async def test_sleeps_for_remaining_interval(self):
        limiter = RateLimiter(min_interval=0.1)
        limiter.last_request = 1000.0

        with patch("discord_mcp.utils.rate_limiter.time.monotonic", side_effect=[1000.04, 1000.1]), \
                patch("discord_mcp.utils.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
            await limiter.wait()

        sleep.assert_awaited_once()
        assert sleep.await_args.args[0] == pytest.approx(0.06)
        assert limiter.last_request == 1000.1

    @pytest.mark.asyncio
    async def test_no_sleep_after_interval_elapsed(self):
        limiter = RateLimiter(min_interval=0.1)
        limiter.last_request = 1000.0

        with patch("discord_mcp.utils.rate_limiter.time.monotonic", return_value=1000.5), \
                patch("discord_mcp.utils.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
            await limiter.wait()

        sleep.assert_not_called()
        assert limiter.last_request == 1000.5

    @pytest.mark.asyncio
    async def test_consecutive_calls_are_spaced(self):
        limiter = RateLimiter(min_interval=0.05)
        with patch("discord_mcp.utils.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
            await limiter.wait()
            await limiter.wait()

        # second call lands well inside the interval
        sleep.assert_awaited_once()
        assert 0 < sleep.await_args.args[0] <= 0.05
