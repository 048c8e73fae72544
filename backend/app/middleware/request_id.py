"""
Middleware that tags every request with an ID.

The ID comes from an incoming X-Request-ID header when present, is bound to
the structlog context and echoed back in the response headers.
"""

import uuid

from starlette.datastructures import Headers

from core.logging import bind_context


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get("x-request-id") or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        bind_context(request_id=request_id)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", []).append((b"x-request-id", request_id.encode()))
            await send(message)

        await self.app(scope, receive, send_wrapper)
