"""JSON body validation middleware.

Requests declaring a JSON content type have their body buffered and parsed
once here. Bodies over `max_body_size` bytes are answered with 413 (checked
against `Content-Length` first, then while reading), malformed bodies with
400; valid bodies are replayed to the downstream app unchanged.
"""

import json
from typing import Optional

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.errors import error_body

# Same default as express.json()
MAX_JSON_BODY_BYTES = 100 * 1024


def is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _declared_length(headers: Headers) -> Optional[int]:
    try:
        return int(headers["content-length"])
    except (KeyError, ValueError):
        return None


class JSONBodyMiddleware:
    def __init__(self, app: ASGIApp, max_body_size: int = MAX_JSON_BODY_BYTES) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        headers = Headers(scope=scope)
        if not is_json_content_type(headers.get("content-type", "")):
            await self.app(scope, receive, send)
            return

        declared = _declared_length(headers)
        if declared is not None and declared > self.max_body_size:
            await self._reject(scope, receive, send, 413, "Payload too large")
            return

        chunks = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > self.max_body_size:
                await self._reject(scope, receive, send, 413, "Payload too large")
                return
            chunks.append(chunk)
            if not message.get("more_body", False):
                break
        body = b"".join(chunks)

        if body:
            try:
                json.loads(body)
            except (ValueError, RecursionError):
                # RecursionError: nesting deeper than the decoder can follow
                await self._reject(scope, receive, send, 400, "Malformed JSON body")
                return

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    @staticmethod
    async def _reject(scope: Scope, receive: Receive, send: Send, status_code: int, message: str) -> None:
        response = JSONResponse(error_body(message), status_code=status_code)
        await response(scope, receive, send)
