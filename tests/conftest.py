"""
Test fixtures for StudyFlow.

Provides app, client, db and api_client fixtures with file-based SQLite.
Gemini is never called; tutor tests patch ``tutor.genai``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


class ManualTicker:
    """Ticker double: ticks only when the test says so."""

    def __init__(self):
        self.callback = None
        self.started = 0
        self.cancelled = 0
        self.shut_down = False

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback):
        self.callback = callback
        self.started += 1

    def cancel(self):
        self.callback = None
        self.cancelled += 1

    def shutdown(self):
        self.cancel()
        self.shut_down = True

    def fire(self, times: int = 1):
        for _ in range(times):
            if self.callback is not None:
                self.callback()


@pytest.fixture
def app(tmp_path):
    """Create app with file-based SQLite for testing (seeded on startup)."""
    from app import create_app

    app = create_app({
        "TESTING": True,
        "DATABASE": str(tmp_path / "test.db"),
        "SECRET_KEY": "test-secret-key",
        "STATIC_DIR": str(tmp_path / "static"),
        "DIST_DIR": str(tmp_path / "dist"),
        "GEMINI_API_KEY": "",
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    """Direct database access for store tests."""
    with app.app_context():
        from database import get_db
        yield get_db()


@pytest.fixture
def api_client(app):
    """StudyflowClient wired to the test app through a WSGI transport."""
    from client import StudyflowClient

    client = StudyflowClient("http://studyflow.test", transport=httpx.WSGITransport(app=app))
    yield client
    client.close()


@pytest.fixture
def ticker():
    return ManualTicker()


@pytest.fixture
def seeded_sessions(db):
    """Three sessions over two seeded subjects (1 = Matemática, 2 = Biologia)."""
    rows = [
        (1, 1200, "2026-01-10T09:00:00.000Z", "Álgebra"),
        (1, 600, "2026-01-12T09:00:00.000Z", None),
        (2, 1800, "2026-01-11T15:30:00.000Z", "Células"),
    ]
    db.executemany(
        "INSERT INTO sessions (subject_id, duration, date, notes) VALUES (?, ?, ?, ?)", rows
    )
    db.commit()
    return rows
