import threading
from collections import deque
from datetime import datetime, timedelta

from isstrack.core.errors import RateLimitExceeded


class RateGovernor:
    """
    Admits at most max_requests per rolling window for one route.
    The limit dependencies run in FastAPI's threadpool, so all state is
    guarded by a threading lock.
    """

    def __init__(self, route: str, max_requests: int, window: timedelta):
        self.route = route
        self.max_requests = max_requests
        self.window = window
        self._admitted = deque()
        self._lock = threading.Lock()

    def _expire(self, now: datetime):
        # caller holds self._lock
        cutoff = now - self.window
        while self._admitted and self._admitted[0] <= cutoff:
            self._admitted.popleft()

    def remaining(self, now: datetime) -> int:
        with self._lock:
            self._expire(now)
            return self.max_requests - len(self._admitted)

    def admit(self, now: datetime) -> None:
        """Record a request or raise RateLimitExceeded. Rejected requests are not recorded."""
        with self._lock:
            self._expire(now)
            if len(self._admitted) >= self.max_requests:
                raise RateLimitExceeded(self.route)
            self._admitted.append(now)
