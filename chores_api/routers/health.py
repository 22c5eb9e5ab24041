"""Health and status endpoints.

Exposes:
- GET /health: lightweight health check with the current server time
- GET /      : welcome message and API version
"""

from fastapi import APIRouter

from ..core.config import API_VERSION
from ..core.log import utc_timestamp
from ..core.models_io import HealthResponse, WelcomeResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    """Container/ELB-friendly health probe endpoint."""
    return HealthResponse(message="Chores API is running!", timestamp=utc_timestamp())


@router.get("/", response_model=WelcomeResponse)
def welcome():
    return WelcomeResponse(message="Welcome to the Family Chores API", version=API_VERSION)
