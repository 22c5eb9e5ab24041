"""Request logging middleware.

Logs `<timestamp> - <METHOD> <path>` for every HTTP request before it is
dispatched. The request and response pass through untouched.
"""

import logging

from starlette.types import ASGIApp, Receive, Scope, Send

from ..core.log import utc_timestamp


class RequestLoggerMiddleware:
    def __init__(self, app: ASGIApp, logger: logging.Logger) -> None:
        self.app = app
        self.logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            self.logger.info("%s - %s %s", utc_timestamp(), scope["method"], scope["path"])
        await self.app(scope, receive, send)
