import asyncio
import logging
import time

logger = logging.getLogger(__name__)

class RateLimiter:
    """Keeps a minimum spacing between outbound Discord requests.

    One instance is shared by every adapter operation, so requests issued by
    different tools are paced against the same clock.
    """

    def __init__(self, min_interval: float = 0.1):
        self.min_interval = min_interval
        self.last_request = 0.0

    async def wait(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_request

        if elapsed < self.min_interval:
            delay = self.min_interval - elapsed
            logger.debug(f"Rate limiter sleeping {delay:.3f}s")
            await asyncio.sleep(delay)

        self.last_request = time.monotonic()
