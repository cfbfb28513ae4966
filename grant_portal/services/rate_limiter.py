"""
Rate Limiter Service
Sliding-window limiter for outbound LLM calls
"""
import logging
import threading
import time
from collections import deque
from typing import Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Rate limiter for API calls using sliding window algorithm

    Usage:
        limiter = RateLimiter(max_calls=20, time_window=60)

        # Before each API call
        limiter.wait_if_needed()
    """

    def __init__(
        self,
        max_calls: int = 10,
        time_window: float = 60,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            max_calls: Maximum number of calls allowed in time window
            time_window: Time window in seconds
            clock: Monotonic time source, injectable for tests
            sleep: Sleep function, injectable for tests
        """
        if max_calls < 1:
            raise ValueError("max_calls must be at least 1")
        self.max_calls = max_calls
        self.time_window = time_window
        self._clock = clock
        self._sleep = sleep
        self._calls = deque()
        self._lock = threading.Lock()

    def _expire(self, now: float):
        while self._calls and self._calls[0] <= now - self.time_window:
            self._calls.popleft()

    def wait_if_needed(self) -> float:
        """
        Block until a call is allowed, then record it

        Returns:
            Seconds spent waiting
        """
        with self._lock:
            waited = 0.0
            now = self._clock()
            self._expire(now)

            if len(self._calls) >= self.max_calls:
                waited = self._calls[0] + self.time_window - now
                logger.info(
                    f"Rate limit reached ({self.max_calls} calls/{self.time_window}s), waiting {waited:.1f}s"
                )
                self._sleep(waited)
                now = self._clock()
                self._expire(now)

            self._calls.append(now)
            return waited

    def get_remaining_calls(self) -> int:
        """Number of calls that can be made without waiting"""
        with self._lock:
            self._expire(self._clock())
            return max(0, self.max_calls - len(self._calls))

    def reset(self):
        """Clear all call history"""
        with self._lock:
            self._calls.clear()
