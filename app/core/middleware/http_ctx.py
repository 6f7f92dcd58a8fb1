import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.ctx import REQUEST_ID_CTX


logger = logging.getLogger("app.access")


def client_ip(request: Request) -> str | None:
    # Peer address only; behind a proxy run uvicorn with --proxy-headers and --forwarded-allow-ips
    return request.client.host if request.client else None


class HttpContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, request_id_header: str = "X-Request-ID"):
        super().__init__(app)
        self.request_id_header = request_id_header

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(self.request_id_header) or str(uuid.uuid4())
        token = REQUEST_ID_CTX.set(rid)
        t0 = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers.setdefault(self.request_id_header, rid)
            return response
        finally:
            logger.info(
                '%s "%s %s" %s %dms rid=%s',
                client_ip(request) or "-", request.method, request.url.path, status_code,
                int((time.perf_counter() - t0) * 1000), rid
            )
            REQUEST_ID_CTX.reset(token)
