# app/core/rate_limiter.py
"""
Request throttling for the public order endpoints.

Counters live in process memory and are not shared between workers. The
`RateLimiter` interface is what call sites depend on, so a Redis-backed
implementation can replace `InMemoryRateLimiter` without touching routes.
"""

import logging
import time
from threading import Lock
from typing import Callable, Dict, Tuple

from fastapi import HTTPException, Request

from app.core.config import (
    ORDER_CREATE_RATE_LIMIT,
    ORDER_LOOKUP_RATE_LIMIT,
    RATE_LIMIT_WINDOW_SECONDS,
    RATE_LIMIT_MAX_KEYS,
)

logger = logging.getLogger(__name__)


class RateLimiter:
    """Admission check keyed by caller identity."""

    def hit(self, key: str) -> bool:
        """Record one request for `key`. Returns False when the budget is spent."""
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError


class InMemoryRateLimiter(RateLimiter):
    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        max_keys: int = RATE_LIMIT_MAX_KEYS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_keys = max_keys
        self._clock = clock
        # key -> (request_count, window_expiry)
        self._store: Dict[str, Tuple[int, float]] = {}
        self._lock = Lock()

    def hit(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            record = self._store.get(key)

            if record is None or now >= record[1]:
                if record is None and len(self._store) >= self.max_keys:
                    self._evict_locked(now)
                self._store[key] = (1, now + self.window_seconds)
                return True

            count, expires_at = record
            if count >= self.max_requests:
                return False

            self._store[key] = (count + 1, expires_at)
            return True

    def _evict_locked(self, now: float) -> None:
        """Make room for one new key. Expired windows go first, then the oldest ones."""
        expired = [k for k, (_, expires_at) in self._store.items() if now >= expires_at]
        for k in expired:
            del self._store[k]

        overflow = len(self._store) - self.max_keys + 1
        if overflow > 0:
            oldest = sorted(self._store, key=lambda k: self._store[k][1])[:overflow]
            for k in oldest:
                del self._store[k]
            logger.warning(f"Rate limit store full; evicted {overflow} active entries")

    def __len__(self) -> int:
        return len(self._store)

    def reset(self) -> None:
        with self._lock:
            self._store.clear()

    def cleanup_expired(self) -> int:
        """Drop keys whose window has ended. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._store.items() if now >= expires_at]
            for key in expired:
                del self._store[key]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired rate limit entries")
        return len(expired)


order_create_limiter = InMemoryRateLimiter(ORDER_CREATE_RATE_LIMIT, RATE_LIMIT_WINDOW_SECONDS)
order_lookup_limiter = InMemoryRateLimiter(ORDER_LOOKUP_RATE_LIMIT, RATE_LIMIT_WINDOW_SECONDS)


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def rate_limit(limiter: RateLimiter):
    """FastAPI dependency factory: `Depends(rate_limit(order_create_limiter))`."""
    async def dependency(request: Request) -> None:
        client_ip = get_client_ip(request)
        if not limiter.hit(client_ip):
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            raise HTTPException(status_code=429, detail="Too many requests. Please try again later.")
    return dependency
