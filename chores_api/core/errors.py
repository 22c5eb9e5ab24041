"""Exception types and JSON error handlers.

Every error response shares the `{"success": false, "message": ...}` shape
used by the routes. Unknown paths and unsupported methods both answer 404.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .models_io import ErrorResponse


class ChoresAPIError(Exception):
    """Base class for errors raised by this service."""


class ConfigurationError(ChoresAPIError, ValueError):
    """An environment variable is set to a value that cannot be used."""


class SchemaPushError(ChoresAPIError):
    """The external schema tool failed, timed out, or could not be started."""


def error_body(message: str, **extra) -> dict:
    return {**ErrorResponse(message=message).model_dump(), **extra}


def register_exception_handlers(app: FastAPI, logger: Optional[logging.Logger] = None) -> None:
    logger = logger or logging.getLogger("chores_api.errors")

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        # Only exact method+path pairs exist, so a wrong method is also "not found"
        if exc.status_code in (404, 405):
            return JSONResponse(error_body("Not found", path=request.url.path), status_code=404)
        return JSONResponse(
            error_body(str(exc.detail)),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(error_body("Internal server error"), status_code=500)
