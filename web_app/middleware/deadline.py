"""Per-request deadline middleware."""

import asyncio
import json
import logging
from typing import Optional

from starlette.types import ASGIApp, Message, Receive, Scope, Send


class DeadlineMiddleware:
    """Cancel a request handler that runs past ``timeout_seconds``.

    Implemented as plain ASGI so the handler task itself is cancelled, along
    with any store call it is awaiting. If the handler had not started its
    response yet the client receives 504.
    """

    def __init__(
        self,
        app: ASGIApp,
        timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.app = app
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger("shortlink.web")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            self.logger.warning(
                f"Request exceeded {self.timeout_seconds}s deadline: {scope.get('method')} {scope.get('path')}"
            )
            if response_started:
                await send({"type": "http.response.body", "body": b"", "more_body": False})
                return

            body = json.dumps({"detail": "Request timed out"}).encode("utf-8")
            await send({
                "type": "http.response.start",
                "status": 504,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode("ascii")),
                ],
            })
            await send({"type": "http.response.body", "body": body})
