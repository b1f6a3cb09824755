"""Per-client rate limiting middleware."""

import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

EXEMPT_PATHS = ("/", "/health", "/docs", "/redoc", "/openapi.json")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window limiter keyed by client address.

    Requests over the limit get a 429 JSON reply with a Retry-After header
    instead of reaching the routers. Liveness and documentation paths are
    never limited.
    """

    def __init__(
        self,
        app,
        requests_per_minute: int = 30,
        window_seconds: float = 60.0,
        exempt_paths: Iterable[str] = EXEMPT_PATHS,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.window_seconds = window_seconds
        self.exempt_paths = set(exempt_paths)
        self.clock = clock
        self.request_history: Dict[str, Deque[float]] = defaultdict(deque)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths or request.url.path.endswith("/health"):
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        now = self.clock()

        if not self._is_allowed(client_ip, now):
            retry_after = self._retry_after(client_ip, now)
            return JSONResponse(
                status_code=429,
                content={
                    "detail": f"Rate limit exceeded. Maximum {self.requests_per_minute} requests per minute allowed."
                },
                headers={"Retry-After": str(retry_after)},
            )

        self.request_history[client_ip].append(now)
        self._cleanup_idle_clients(now)

        return await call_next(request)

    def _get_client_ip(self, request: Request) -> str:
        """Client address, honouring proxy headers."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"

    def _is_allowed(self, client_ip: str, now: float) -> bool:
        window_start = now - self.window_seconds
        timestamps = self.request_history[client_ip]

        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        return len(timestamps) < self.requests_per_minute

    def _retry_after(self, client_ip: str, now: float) -> int:
        timestamps = self.request_history[client_ip]
        if not timestamps:
            return 1
        return max(1, int(timestamps[0] + self.window_seconds - now + 0.999))

    def _cleanup_idle_clients(self, now: float):
        # Forget clients idle for five windows
        idle_before = now - 5 * self.window_seconds
        idle = [ip for ip, ts in self.request_history.items() if not ts or ts[-1] < idle_before]
        for ip in idle:
            del self.request_history[ip]
