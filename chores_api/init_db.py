"""Schema bootstrap: `chores-init-db` or `python -m chores_api.init_db`.

Pushes the declared database schema with the external schema tool before
the server is started. Failures are logged but the script still exits 0 so
that a transient migration problem does not keep the server from starting.
Watch the logs: the exit status will not reflect a failed push.
"""

import logging
import subprocess
from typing import Mapping, Optional

from .core.config import SchemaPushSettings, load_schema_settings
from .core.errors import ConfigurationError, SchemaPushError
from .core.log import configure_logging, get_logger


def push_schema(settings: SchemaPushSettings, logger: logging.Logger) -> None:
    """Run the schema tool to completion, inheriting this process's stdio.

    Raises:
        SchemaPushError: non-zero exit, timeout, or the tool could not start
    """
    logger.debug("Running %s in %s", " ".join(settings.command), settings.cwd)
    try:
        with subprocess.Popen(list(settings.command), cwd=settings.cwd) as proc:
            try:
                returncode = proc.wait(timeout=settings.timeout)
            except subprocess.TimeoutExpired:
                proc.kill()
                proc.wait()
                raise SchemaPushError(f"{settings.command[0]} timed out after {settings.timeout:g}s")
    except OSError as exc:
        raise SchemaPushError(f"could not start {settings.command[0]}: {exc}") from exc

    if returncode != 0:
        raise SchemaPushError(f"{settings.command[0]} exited with status {returncode}")


def main(environ: Optional[Mapping[str, str]] = None, logger: Optional[logging.Logger] = None) -> int:
    if logger is None:
        configure_logging()
        logger = get_logger("init_db")

    logger.info("Initializing database schema...")
    try:
        push_schema(load_schema_settings(environ), logger)
    except (ConfigurationError, SchemaPushError) as exc:
        logger.error("Database initialization failed: %s", exc)
        logger.warning("Continuing anyway; the server will start against the current schema")
        return 0

    logger.info("Database initialized successfully")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
