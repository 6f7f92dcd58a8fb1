import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.domain.exceptions import AppError, NotFound, Unauthorized, InvalidInput, PayloadTooLarge, TooManyRequests, \
    InternalError, ServerConfigurationError
from app.core.ctx import REQUEST_ID_CTX

MEDIA_TYPE = "application/problem+json"
GENERIC_SERVER_ERROR = "Server error"

logger = logging.getLogger("app.errors")

_STATUS_BY_CLASS: dict[type[AppError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    PayloadTooLarge: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    TooManyRequests: status.HTTP_429_TOO_MANY_REQUESTS,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AppError: status.HTTP_400_BAD_REQUEST,
}

_TITLES: dict[type[AppError], str] = {
    NotFound: "Not Found",
    Unauthorized: "Unauthorized",
    InvalidInput: "Bad Request",
    PayloadTooLarge: "Payload Too Large",
    TooManyRequests: "Too Many Requests",
    ServerConfigurationError: "Server Configuration Error",
    InternalError: "Internal Server Error",
    AppError: "Application Error",
}

def _www_authenticate_header(
        scheme: str = "Bearer",
        realm: str | None = "api",
        error: str | None = "invalid_token",
        error_description: str | None = None,
) -> str:
    parts = [scheme]
    attributes = []
    if realm:
        attributes.append(f'realm="{realm}"')
    if error:
        attributes.append(f'error="{error}"')
    if error_description:
        attributes.append(f'error_description="{error_description}"')
    if attributes:
        parts.append(" " + ", ".join(attributes))
    return "".join(parts)


def _status_for(exc: AppError) -> int:
    for cls in type(exc).mro():
        if cls in _STATUS_BY_CLASS:
            return _STATUS_BY_CLASS[cls]
    return status.HTTP_400_BAD_REQUEST


def _title_for(exc: AppError) -> str:
    for cls in type(exc).mro():
        if cls in _TITLES:
            return _TITLES[cls]
    return "Application Error"


def problem_response(
    request: Request,
    *,
    http_status: int,
    title: str,
    detail: str | None = None,
    extra: dict | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = {
        "status": http_status,
        "title": title,
        "detail": detail,
        "instance": str(request.url),
    }
    req_id = REQUEST_ID_CTX.get()
    if req_id:
        body["trace_id"] = req_id
    if extra:
        body.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=http_status, content=body, media_type=MEDIA_TYPE, headers=headers or {})


def app_error_response(request: Request, exc: AppError) -> JSONResponse:
    status_code = _status_for(exc)
    title = _title_for(exc)

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s: %s", type(exc).__name__, exc, extra={"context": exc.ctx})
        detail = str(exc) if isinstance(exc, ServerConfigurationError) else GENERIC_SERVER_ERROR
        return problem_response(request, http_status=status_code, title=title, detail=detail)

    detail = str(exc) or None
    extra = {"context": exc.ctx} if exc.ctx else None

    headers: dict[str, str] | None = None
    if isinstance(exc, Unauthorized):
        headers = {
            "WWW-Authenticate": _www_authenticate_header(
                scheme="Bearer", realm="api", error="invalid_token", error_description=detail
            )
        }
    elif isinstance(exc, TooManyRequests):
        headers = {"Retry-After": str(exc.retry_after)}

    return problem_response(
        request,
        http_status=status_code,
        title=title,
        detail=detail,
        extra=extra,
        headers=headers
    )


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": ".".join(str(part) for part in err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def register_error_handler(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        return app_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        return problem_response(
            request,
            http_status=status.HTTP_400_BAD_REQUEST,
            title="Bad Request",
            detail="Missing or invalid fields",
            extra={"context": {"errors": _validation_errors(exc)}}
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(request: Request, exc: StarletteHTTPException):
        title = "Not Found" if exc.status_code == status.HTTP_404_NOT_FOUND else "HTTP Error"
        return problem_response(
            request,
            http_status=exc.status_code,
            title=title,
            detail=str(exc.detail) if exc.detail else None,
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return problem_response(
            request,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            title="Internal Server Error",
            detail=GENERIC_SERVER_ERROR
        )
