"""ASGI middleware capping request body size."""

from __future__ import annotations

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from llm_proxy.errors import PayloadTooLargeError
from llm_proxy.logging_utils import get_logger

logger = get_logger(__name__)


class BodySizeLimitMiddleware:
    """Buffer the request body and reject it once it exceeds ``max_body_bytes``.

    The declared ``Content-Length`` is checked first; bodies without one
    (chunked uploads) are counted as they arrive.
    """

    def __init__(self, app: ASGIApp, *, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length", "")
        if content_length.isdigit() and int(content_length) > self.max_body_bytes:
            await self._reject(scope, receive, send)
            return

        body = b""
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away before the body finished.
                return
            body += message.get("body", b"")
            more_body = message.get("more_body", False)
            if len(body) > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        error = PayloadTooLargeError(f"Request body exceeds {self.max_body_bytes} bytes.")
        logger.warning("Rejected %s %s | %s", scope.get("method"), scope.get("path"), error.details)
        response = JSONResponse(status_code=error.status_code, content=error.to_dict())
        await response(scope, receive, send)
