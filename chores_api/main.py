"""App factory for the Family Chores API.

- Configures CORS for the single frontend origin (credentials enabled)
- Rejects malformed JSON request bodies and logs every request
- Registers the health/welcome router and JSON error handlers

Settings are resolved by the caller (see `server.main`) and passed in, so
tests can build an app without touching the process environment.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import API_TITLE, API_VERSION, Settings
from .core.errors import register_exception_handlers
from .core.log import get_logger
from .middleware.json_body import JSONBodyMiddleware
from .middleware.request_logger import RequestLoggerMiddleware
from .routers import health


def create_app(settings: Settings, logger: Optional[logging.Logger] = None) -> FastAPI:
    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description="Backend for the family chores tracker",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )

    # Last added runs first: CORS -> JSON body -> request logger -> routes
    app.add_middleware(RequestLoggerMiddleware, logger=logger or get_logger("requests"))
    app.add_middleware(JSONBodyMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=settings.cors_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, get_logger("errors"))

    app.include_router(health.router)

    @app.on_event("startup")
    def _startup_log():
        log = get_logger("app")
        log.info("Environment: %s", settings.environment)
        log.info("CORS origin: %s", settings.cors_origin)

    return app
