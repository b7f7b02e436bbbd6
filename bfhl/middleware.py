from typing import Any, Dict, List

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from bfhl import envelope

BODY_TOO_LARGE_MESSAGE = "Request body too large"


class MaxBodySizeMiddleware:
    """Reject requests whose body exceeds `max_body_size` bytes.

    The declared `Content-Length` is checked first. Bodies without one
    (chunked uploads) are read and counted before the app sees them, then
    replayed to it unchanged.
    """

    def __init__(self, app: ASGIApp, max_body_size: int, official_email: str) -> None:
        self.app = app
        self.max_body_size = max_body_size
        self.official_email = official_email

    async def reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = JSONResponse(
            status_code=400,
            content=envelope.failure(self.official_email, BODY_TOO_LARGE_MESSAGE).to_dict(),
        )
        await response(scope, receive, send)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        for header, value in scope.get("headers", []):
            if header == b"content-length":
                try:
                    size = int(value)
                except ValueError:
                    size = self.max_body_size + 1
                if size > self.max_body_size:
                    await self.reject(scope, receive, send)
                    return

        messages: List[Dict[str, Any]] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_size:
                await self.reject(scope, receive, send)
                return
            more_body = message.get("more_body", False)

        async def replay():
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)
