"""Request logging and ID injection middleware."""

import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from parkmeter.core.logging import get_logger, set_request_id


class RequestIDMiddleware:
    """
    Inject unique request ID into context.

    Every request gets a UUID unless the caller sent X-Request-ID.
    The id is echoed back in the response headers and bound to every log line.
    """

    def __init__(self, app: ASGIApp):
        self.app = app
        self.logger = get_logger(__name__)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        request_id = headers.get(b"x-request-id", str(uuid.uuid4()).encode()).decode("latin-1")
        set_request_id(request_id)

        started = time.perf_counter()
        self.logger.info("request.start", method=scope["method"], path=scope["path"])

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((b"x-request-id", request_id.encode("latin-1")))
                message["headers"] = response_headers

                self.logger.info(
                    "request.complete",
                    status_code=message.get("status"),
                    duration_ms=int((time.perf_counter() - started) * 1000),
                )

            await send(message)

        await self.app(scope, receive, send_with_request_id)
