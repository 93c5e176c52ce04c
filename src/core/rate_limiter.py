import time
from collections import defaultdict, deque

from config import settings


class RateLimiter:
    """Sliding-window limiter keyed by caller (user id for write routes)."""

    def __init__(self, limit: int | None = None, window_seconds: float = 60.0) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = defaultdict(deque)

    @property
    def max_hits(self) -> int:
        return self.limit if self.limit is not None else settings.RATE_LIMIT_PER_MINUTE

    def is_allowed(self, key: str) -> bool:
        now = time.monotonic()
        hits = self._hits[key]

        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

        if len(hits) >= self.max_hits:
            return False

        hits.append(now)
        return True

    def reset(self) -> None:
        self._hits.clear()


write_limiter = RateLimiter()
