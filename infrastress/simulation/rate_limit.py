# Fixed-window request limiter
# Layer 3: Simulation Engine
#
# Counts requests per client key inside a fixed window. The limiter holds
# its own counters and is passed to run_scenario() by the caller; nothing
# here is shared at module level except the preset table.

import time
from dataclasses import dataclass

# (max_requests, window_seconds)
RATE_LIMITS = {
    "simulation": (10, 60),
    "ingest": (20, 60),
    "explain": (30, 60),
    "general": (100, 60),
}


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """Allow at most max_requests per key in each window.

    Args:
        max_requests: Requests allowed per window
        window_seconds: Window length in seconds
        clock: Callable returning seconds; time.monotonic by default
    """

    def __init__(self, max_requests, window_seconds, clock=time.monotonic):
        if max_requests < 1:
            raise ValueError(f"max_requests must be at least 1, got {max_requests}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows = {}

    @classmethod
    def from_preset(cls, name, clock=time.monotonic):
        """Build a limiter from a RATE_LIMITS preset name.

        Raises:
            ValueError: If preset name not found
        """
        if name not in RATE_LIMITS:
            valid = ", ".join(RATE_LIMITS.keys())
            raise ValueError(f"Unknown rate limit preset: '{name}'. Available: {valid}")
        max_requests, window_seconds = RATE_LIMITS[name]
        return cls(max_requests, window_seconds, clock=clock)

    def check_and_record(self, key):
        """Record a request for key; return False if it exceeds the limit."""
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now >= window.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return True
        if window.count >= self.max_requests:
            return False
        window.count += 1
        return True

    def remaining(self, key):
        """Requests left for key in its current window."""
        window = self._windows.get(key)
        if window is None or self._clock() >= window.reset_at:
            return self.max_requests
        return max(0, self.max_requests - window.count)

    def retry_after(self, key):
        """Seconds until key's window resets, 0.0 if it is not limited."""
        window = self._windows.get(key)
        if window is None:
            return 0.0
        return max(0.0, window.reset_at - self._clock())

    def sweep(self):
        """Drop expired windows; returns the number removed."""
        now = self._clock()
        expired = [key for key, w in self._windows.items() if now >= w.reset_at]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def __len__(self):
        return len(self._windows)
