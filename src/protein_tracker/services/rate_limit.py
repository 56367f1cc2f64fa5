"""In-process sliding-window rate limiting."""

import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class RateDecision:
    """Outcome of a rate limit check."""

    allowed: bool
    retry_after_seconds: int | None = None


class SlidingWindowRateLimiter:
    """Admit at most ``max_requests`` per caller in any ``window_seconds`` span.

    Request instants are kept per caller and evicted by elapsed time on every
    call, so a burst frees up one slot at a time as each request ages out of
    the window. State lives in process memory and caller keys are never
    dropped.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def allow(self, caller_id: str) -> RateDecision:
        """Record a request for the caller if it fits in the window."""
        with self._lock:
            now = self._clock()
            requests = self._requests.setdefault(caller_id, deque())
            while requests and now - requests[0] >= self.window_seconds:
                requests.popleft()
            if len(requests) >= self.max_requests:
                wait = requests[0] + self.window_seconds - now
                return RateDecision(
                    allowed=False, retry_after_seconds=max(1, math.ceil(wait))
                )
            requests.append(now)
            return RateDecision(allowed=True)

