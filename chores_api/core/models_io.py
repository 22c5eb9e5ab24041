"""Pydantic response schemas used by the API.

These match the payloads the web client already consumes.
"""

from pydantic import BaseModel


class WelcomeResponse(BaseModel):
    """Body of `GET /`."""
    success: bool = True
    message: str
    version: str


class HealthResponse(BaseModel):
    """Body of `GET /health`."""
    success: bool = True
    message: str
    timestamp: str  # ISO-8601, UTC


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
