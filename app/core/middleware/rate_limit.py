import logging
import time
from fastapi import Request
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from app.api.exceptions import app_error_response
from app.core.middleware.http_ctx import client_ip
from app.domain.exceptions import TooManyRequests


logger = logging.getLogger("app.ratelimit")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window per-IP limit kept in Redis (the client lives on ``app.state.redis``)."""

    def __init__(self, app, limit: int, window_seconds: int = 60, exempt_paths: tuple[str, ...] = ()):
        super().__init__(app)
        self.limit = limit
        self.window_seconds = window_seconds
        self.exempt_paths = exempt_paths

    async def _hit(self, client, ip: str) -> tuple[int, int]:
        window_id = int(time.time()) // self.window_seconds
        key = f"rl:ip:{ip}:{window_id}"
        pipe = client.pipeline()
        pipe.set(key, 0, ex=self.window_seconds, nx=True)
        pipe.incr(key)
        pipe.ttl(key)
        _, count, ttl = await pipe.execute()
        return int(count), int(ttl) if isinstance(ttl, int) and ttl > 0 else self.window_seconds

    async def dispatch(self, request: Request, call_next):
        ip = client_ip(request)
        if ip is None or request.url.path in self.exempt_paths:
            return await call_next(request)

        try:
            count, ttl = await self._hit(request.app.state.redis, ip)
        except RedisError:
            logger.warning("Rate limiter unavailable; letting request through", exc_info=True)
            return await call_next(request)

        if count > self.limit:
            logger.warning("Rate limit exceeded for %s (%d/%d)", ip, count, self.limit)
            exc = TooManyRequests("Rate limit exceeded", retry_after=ttl, ctx={"limit": self.limit})
            return app_error_response(request, exc)
        return await call_next(request)
