"""Rate limiting middleware for FastAPI.

Protects the endpoints that call the LLM or take uploads.
Uses a simple in-memory sliding window approach.
"""

import logging
import time
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from apps.sessions.helpers import SESSION_COOKIE
from config import get_settings
from responses import ResponseCode, error_dict

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests_per_minute: int = 20
    requests_per_hour: int = 200
    burst_limit: int = 5  # Max requests in 10 seconds

    @classmethod
    def from_settings(cls) -> "RateLimitConfig":
        settings = get_settings()
        return cls(
            requests_per_minute=settings.rate_limit_per_minute,
            requests_per_hour=settings.rate_limit_per_hour,
            burst_limit=settings.rate_limit_burst,
        )


class RateLimiter:
    """Simple in-memory rate limiter using sliding window."""

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or RateLimitConfig()
        self._clock = clock
        # Track request timestamps per client
        self._requests: dict[str, list[float]] = defaultdict(list)

    def get_client_id(self, request: Request) -> str:
        """Extract client identifier from request."""
        # Try session cookie first
        session_id = request.cookies.get(SESSION_COOKIE)
        if session_id:
            return f"session:{session_id}"

        # Fall back to IP address
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return f"ip:{forwarded.split(',')[0].strip()}"

        client = request.client
        if client:
            return f"ip:{client.host}"

        return "unknown"

    def _cleanup_old_requests(self, client_id: str, now: float) -> None:
        """Remove requests older than 1 hour."""
        hour_ago = now - 3600
        self._requests[client_id] = [
            ts for ts in self._requests[client_id] if ts > hour_ago
        ]

    def _windows(self) -> tuple[tuple[int, int, str], ...]:
        """(window seconds, limit, message), checked in order."""
        return (
            (10, self.config.burst_limit, "Too many requests. Please slow down."),
            (
                60,
                self.config.requests_per_minute,
                "Rate limit exceeded. Please wait a moment.",
            ),
            (3600, self.config.requests_per_hour, "Hourly rate limit exceeded."),
        )

    def check(self, client_id: str) -> tuple[bool, str | None, dict[str, str]]:
        """Check if a client is within rate limits, recording the request if so.

        Returns:
            Tuple of (allowed, error_message, headers).
        """
        now = self._clock()

        self._cleanup_old_requests(client_id, now)
        requests = self._requests[client_id]

        for window, limit, message in self._windows():
            in_window = sum(1 for ts in requests if ts > now - window)
            if in_window >= limit:
                return (
                    False,
                    message,
                    {
                        "X-RateLimit-Limit": str(limit),
                        "X-RateLimit-Remaining": "0",
                        "Retry-After": str(window),
                    },
                )

        # Request allowed - record it
        minute_requests = sum(1 for ts in requests if ts > now - 60)
        requests.append(now)

        return (
            True,
            None,
            {
                "X-RateLimit-Limit": str(self.config.requests_per_minute),
                "X-RateLimit-Remaining": str(
                    self.config.requests_per_minute - minute_requests - 1
                ),
            },
        )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to apply rate limiting to specific paths."""

    # Paths that need rate limiting (LLM calls and uploads)
    RATE_LIMITED_PATHS = frozenset(
        {
            "/api/chat",
            "/api/chat/summarize",
            "/api/documents/upload",
            "/api/documents/upload/stream",
        }
    )

    def __init__(
        self,
        app,
        config: RateLimitConfig | None = None,
        paths: frozenset[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.limiter = RateLimiter(config or RateLimitConfig.from_settings())
        self.paths = paths if paths is not None else self.RATE_LIMITED_PATHS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with rate limiting."""
        # Only rate limit specific paths
        if request.url.path not in self.paths:
            return await call_next(request)

        client_id = self.limiter.get_client_id(request)
        allowed, error_message, headers = self.limiter.check(client_id)

        if not allowed:
            logger.warning(
                "Rate limit exceeded for %s on %s", client_id, request.url.path
            )
            response = JSONResponse(
                status_code=429,
                content=error_dict(ResponseCode.LLM_RATE_LIMIT, error_message),
            )
            for key, value in headers.items():
                response.headers[key] = value
            return response

        response = await call_next(request)

        # Add rate limit headers to successful responses
        for key, value in headers.items():
            response.headers[key] = value

        return response
