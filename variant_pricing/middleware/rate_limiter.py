"""
Rate Limiting Middleware for API requests.

- Every request must carry an x-api-key header
- N requests per minute per API key (RATE_LIMIT_PER_MINUTE)
- Returns 429 Too Many Requests when limit exceeded
"""

import logging
from datetime import datetime
from typing import Iterable, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from variant_pricing.core.cache import counter_store

logger = logging.getLogger(__name__)

OPEN_PATHS = ("/", "/health", "/docs", "/openapi.json")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window rate limiting per API key, counted in Redis.
    Requests pass unlimited (but still need a key) while Redis is down.
    """

    def __init__(self, app, requests_per_minute: int = 60, open_paths: Iterable[str] = OPEN_PATHS):
        """
        Initialize rate limiter.

        Args:
            app: FastAPI application
            requests_per_minute: Maximum requests allowed per minute (default: 60)
            open_paths: Paths served without an API key
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.window_seconds = 60
        self.open_paths = set(open_paths)
        logger.info(f"Rate limiter initialized: {requests_per_minute} requests per minute")

    def _get_api_key(self, request: Request) -> Optional[str]:
        # Header lookup is case-insensitive
        return request.headers.get("x-api-key")

    def _get_rate_limit_key(self, api_key: str) -> str:
        current_minute = datetime.utcnow().strftime("%Y-%m-%d-%H-%M")
        return counter_store.get_key("rate_limit", api_key, current_minute)

    async def _check_rate_limit(self, api_key: str) -> tuple[bool, int, int]:
        """
        Count the request and check it against the limit.

        Returns:
            Tuple of (allowed: bool, current_count: int, limit: int)
        """
        count = await counter_store.increment(self._get_rate_limit_key(api_key), self.window_seconds)

        if count is None:
            logger.warning("Rate limit counters unavailable, allowing request")
            return True, 0, self.requests_per_minute

        if count > self.requests_per_minute:
            logger.warning(
                f"Rate limit exceeded for API key {api_key[:8]}***: "
                f"{count}/{self.requests_per_minute}"
            )
            return False, count, self.requests_per_minute

        logger.debug(f"Rate limit check for {api_key[:8]}***: {count}/{self.requests_per_minute}")
        return True, count, self.requests_per_minute

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths:
            return await call_next(request)

        api_key = self._get_api_key(request)

        if not api_key:
            client_host = request.client.host if request.client else "unknown"
            logger.warning(f"Request without API key from {client_host}")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "error": "Missing API Key",
                    "detail": "x-api-key header is required",
                    "timestamp": datetime.utcnow().isoformat()
                }
            )

        allowed, current_count, limit = await self._check_rate_limit(api_key)

        if not allowed:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "Rate Limit Exceeded",
                    "detail": f"Maximum {limit} requests per minute allowed",
                    "current_count": current_count,
                    "limit": limit,
                    "retry_after": self.window_seconds,
                    "timestamp": datetime.utcnow().isoformat()
                },
                headers={
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(self.window_seconds),
                    "Retry-After": str(self.window_seconds)
                }
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(max(0, limit - current_count))
        response.headers["X-RateLimit-Reset"] = str(self.window_seconds)

        return response
