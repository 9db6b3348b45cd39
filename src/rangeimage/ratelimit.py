"""클라이언트별 요청 제한 (1분 슬라이딩 윈도우)."""

import threading
import time
from collections import deque

WINDOW_SECONDS = 60.0
CLEANUP_INTERVAL = 300.0


class RateLimiter:
    def __init__(self, limit_per_minute: int, clock=time.monotonic, cleanup_interval: float = CLEANUP_INTERVAL):
        self.limit = limit_per_minute
        self.cleanup_interval = cleanup_interval
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: dict[str, deque] = {}
        self._last_cleanup = None

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)

    def allow(self, client_id: str, now: float | None = None) -> bool:
        if self.limit <= 0:
            return True
        now = self._clock() if now is None else now
        cutoff = now - WINDOW_SECONDS
        with self._lock:
            self._cleanup(now, cutoff)
            hits = self._hits.setdefault(client_id, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if len(hits) >= self.limit:
                return False
            hits.append(now)
            return True

    def _cleanup(self, now: float, cutoff: float) -> None:
        # cleanup_interval마다 한 번, 윈도우가 모두 지난 클라이언트를 지운다
        if self._last_cleanup is None:
            self._last_cleanup = now
            return
        if now - self._last_cleanup < self.cleanup_interval:
            return
        idle = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in idle:
            del self._hits[key]
        self._last_cleanup = now
