from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from app.api.exceptions import register_error_handler
from app.api.v1.routes import auth, invoices, dashboard, health
from app.core.config import CORS_ORIGINS, MAX_BODY_BYTES, RATE_LIMIT_PER_MINUTE
from app.core.logging import configure_logging
from app.core.middleware.body_limit import BodySizeLimitMiddleware
from app.core.middleware.http_ctx import HttpContextMiddleware
from app.core.middleware.rate_limit import RateLimitMiddleware
from app.core.middleware.security_headers import SecurityHeadersMiddleware
from app.core.redis import create_redis


@asynccontextmanager
async def lifespan(app: FastAPI):
    r = await create_redis()
    app.state.redis = r
    try:
        yield
    finally:
        await r.aclose()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Billing API", lifespan=lifespan)

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(RateLimitMiddleware, limit=RATE_LIMIT_PER_MINUTE, exempt_paths=("/health", "/api/health"))
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=MAX_BODY_BYTES)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(HttpContextMiddleware, request_id_header="X-Request-ID")

    register_error_handler(app)
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(invoices.router)
    app.include_router(dashboard.router)
    return app


app = create_app()
