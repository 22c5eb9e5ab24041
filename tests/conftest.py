"""
Shared fixtures: settings, app, test client and a capturing request logger.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pytest
from fastapi.testclient import TestClient

from chores_api.core.config import Settings
from chores_api.main import create_app

REPO_ROOT = Path(__file__).resolve().parent.parent
FRONTEND_ORIGIN = "http://localhost:3000"


class RecordingHandler(logging.Handler):
    """Keeps every record it receives so tests can inspect log output."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> List[str]:
        return [r.getMessage() for r in self.records]


def make_recording_logger(name: str) -> tuple[logging.Logger, RecordingHandler]:
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = RecordingHandler()
    logger.addHandler(handler)
    return logger, handler


@pytest.fixture
def settings() -> Settings:
    return Settings(cors_origin=FRONTEND_ORIGIN)


@pytest.fixture
def request_log() -> RecordingHandler:
    _, handler = make_recording_logger("tests.requests")
    return handler


@pytest.fixture
def app(settings: Settings, request_log: RecordingHandler):
    return create_app(settings, logger=logging.getLogger("tests.requests"))


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c
