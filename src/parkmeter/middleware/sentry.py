"""Sentry context middleware to tag error reports with the request."""

import sentry_sdk
from starlette.types import ASGIApp, Receive, Scope, Send

from parkmeter.core.logging import get_request_id


class SentryContextMiddleware:
    """
    Tag Sentry events with the request id and route.

    Must run inside RequestIDMiddleware so the id is already in context.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = get_request_id()
        sentry_sdk.set_tag("request_id", request_id)
        sentry_sdk.set_context(
            "request",
            {
                "method": scope.get("method"),
                "path": scope.get("path"),
                "request_id": request_id,
            },
        )

        await self.app(scope, receive, send)
