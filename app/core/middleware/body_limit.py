from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send, Message
from app.api.exceptions import app_error_response
from app.domain.exceptions import PayloadTooLarge

TOO_LARGE = "Request body too large"


class _BodyTooLarge(Exception):
    pass


class BodySizeLimitMiddleware:
    """Rejects declared or streamed request bodies above ``max_bytes`` with a 413."""

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    def _too_large(self, request: Request):
        return app_error_response(request, PayloadTooLarge(TOO_LARGE, ctx={"limit": self.max_bytes}))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_bytes:
            await self._too_large(request)(scope, receive, send)
            return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    exceeded = True
                    raise _BodyTooLarge()
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # body parsing errors get turned into a 400 downstream; drop it in favour of the 413
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except _BodyTooLarge:
            if response_started:
                raise

        if exceeded and not response_started:
            await self._too_large(request)(scope, receive, send)
