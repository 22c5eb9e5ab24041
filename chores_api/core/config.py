"""Service-wide configuration.

Resolves the process environment into immutable settings objects:
- `Settings`: port, host, environment name and CORS policy for the API server
- `SchemaPushSettings`: command, working directory and timeout for the
  schema bootstrap script

Both are built once at process entry by `load_settings` /
`load_schema_settings` and passed down explicitly.
"""

import os
import shlex
from pathlib import Path
from typing import Mapping, Optional, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError

API_TITLE = "Family Chores API"
API_VERSION = "1.0.0"

DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_CORS_ORIGIN = "http://localhost:3000"

DEFAULT_SCHEMA_PUSH_COMMAND = "npx prisma db push --accept-data-loss --skip-generate"
DEFAULT_SCHEMA_PUSH_TIMEOUT = 300.0


class Settings(BaseModel):
    """Startup parameters for the API server."""

    model_config = ConfigDict(frozen=True)

    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    host: str = DEFAULT_HOST
    environment: str = DEFAULT_ENVIRONMENT
    cors_origin: str = DEFAULT_CORS_ORIGIN
    cors_credentials: bool = True

    @field_validator("cors_origin")
    @classmethod
    def _check_origin(cls, value: str) -> str:
        if value == "*":
            return value
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"{value!r} is not an http(s) origin")
        if parts.path not in ("", "/") or parts.query or parts.fragment or value.endswith(("?", "#")):
            raise ValueError(f"{value!r} has a path, query or fragment; use scheme://host[:port]")
        # Browsers never send a trailing slash in the Origin header
        return f"{parts.scheme}://{parts.netloc}"

    @model_validator(mode="after")
    def _no_wildcard_with_credentials(self) -> "Settings":
        if self.cors_credentials and self.cors_origin == "*":
            raise ValueError("wildcard CORS origin cannot be used with credentials")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class SchemaPushSettings(BaseModel):
    """How the schema bootstrap script invokes the external schema tool."""

    model_config = ConfigDict(frozen=True)

    command: Tuple[str, ...] = tuple(shlex.split(DEFAULT_SCHEMA_PUSH_COMMAND))
    cwd: Path = Field(default_factory=Path.cwd)
    timeout: float = Field(DEFAULT_SCHEMA_PUSH_TIMEOUT, gt=0)

    @field_validator("command", mode="before")
    @classmethod
    def _split_command(cls, value):
        if isinstance(value, str):
            value = shlex.split(value)
        if not value:
            raise ValueError("schema push command is empty")
        return value


def _read(environ: Mapping[str, str], *names: str) -> Optional[str]:
    """First non-empty value among `names`, stripped."""
    for name in names:
        value = environ.get(name, "").strip()
        if value:
            return value
    return None


def _describe(exc: ValidationError, sources: Mapping[str, str]) -> str:
    problems = []
    for error in exc.errors():
        field = error["loc"][0] if error["loc"] else None
        label = sources.get(field, field) if field else "configuration"
        problems.append(f"{label}: {error['msg']}")
    return "Invalid configuration: " + "; ".join(problems)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build `Settings` from the environment, substituting defaults.

    Raises:
        ConfigurationError: a variable is set but malformed
    """
    environ = os.environ if environ is None else environ
    sources = {
        "port": "PORT",
        "host": "HOST",
        "environment": "APP_ENV",
        "cors_origin": "FRONTEND_URL",
    }
    values = {
        "port": _read(environ, "PORT"),
        "host": _read(environ, "HOST"),
        "environment": _read(environ, "APP_ENV", "NODE_ENV"),
        "cors_origin": _read(environ, "FRONTEND_URL"),
    }
    try:
        return Settings(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc, sources)) from exc


def load_schema_settings(environ: Optional[Mapping[str, str]] = None) -> SchemaPushSettings:
    """Build `SchemaPushSettings` from the environment, substituting defaults."""
    environ = os.environ if environ is None else environ
    sources = {
        "command": "SCHEMA_PUSH_COMMAND",
        "cwd": "SCHEMA_PUSH_CWD",
        "timeout": "SCHEMA_PUSH_TIMEOUT",
    }
    values = {field: _read(environ, name) for field, name in sources.items()}
    try:
        return SchemaPushSettings(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc, sources)) from exc
