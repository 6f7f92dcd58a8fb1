from app.core.utils.serialization import normalize_ctx


class AppError(Exception):
    def __init__(self, message: str = "", *, ctx: dict | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.ctx = normalize_ctx(ctx or {})


class NotFound(AppError):
    pass
class Unauthorized(AppError):
    pass
class InvalidInput(AppError):
    pass
class PayloadTooLarge(AppError):
    pass


class TooManyRequests(AppError):
    def __init__(self, message: str = "", *, retry_after: int = 60, ctx: dict | None = None) -> None:
        super().__init__(message, ctx=ctx)
        self.retry_after = retry_after


class InternalError(AppError):
    pass


class ServerConfigurationError(InternalError):
    pass
