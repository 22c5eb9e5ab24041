"""Server entrypoint: `chores-api` or `python -m chores_api.server`.

Startup sequence:
1. Load `.env` (variables already in the environment win)
2. Resolve settings; malformed values abort with exit status 1
3. Build the app and bind the listening socket; bind failures exit 1
4. Serve with uvicorn until SIGINT/SIGTERM
"""

import errno
import os
import socket
import sys

import uvicorn
from dotenv import load_dotenv

from .core.config import load_settings
from .core.errors import ConfigurationError
from .core.log import configure_logging, get_logger
from .main import create_app


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind a TCP socket for uvicorn to serve on. Raises `OSError` on failure."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(socket.SOMAXCONN)
    except OSError:
        sock.close()
        raise
    return sock


def main() -> None:
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        get_logger("server").error("%s", exc)
        sys.exit(1)

    configure_logging(settings.environment)
    logger = get_logger("server")
    app = create_app(settings, logger=get_logger("requests"))

    try:
        sock = bind_socket(settings.host, settings.port)
    except OSError as exc:
        logger.error("Failed to bind %s:%d: %s", settings.host, settings.port, exc.strerror or exc)
        if exc.errno == errno.EADDRINUSE:
            logger.error("Port %d is already in use; stop the other process or change PORT", settings.port)
        sys.exit(1)

    logger.info("Server running on http://localhost:%d (bound to %s)", settings.port, settings.host)
    logger.info("Health check: http://localhost:%d/health", settings.port)
    logger.info("Process ID: %d", os.getpid())

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
        lifespan="on",
    )
    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
        logger.info("Server closed")
    if not server.started:
        logger.error("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
