"""
SQLite database layer for StudyFlow.

Uses raw sqlite3 with WAL mode and parameterized queries. The schema is
created idempotently on every start; there is no migration mechanism.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from flask import current_app, g

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = str(Path(__file__).parent / "studyflow.db")


SCHEMA = """
CREATE TABLE IF NOT EXISTS subjects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    color TEXT DEFAULT '#4f46e5',
    icon TEXT DEFAULT 'Book'
);

-- duration is stored in seconds
CREATE TABLE IF NOT EXISTS sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    subject_id INTEGER NOT NULL,
    duration INTEGER NOT NULL,
    date TEXT NOT NULL,
    notes TEXT,
    FOREIGN KEY (subject_id) REFERENCES subjects(id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_sessions_subject ON sessions(subject_id);
CREATE INDEX IF NOT EXISTS idx_sessions_date ON sessions(date);

CREATE TABLE IF NOT EXISTS goals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    subject_id INTEGER NOT NULL,
    target_hours INTEGER NOT NULL,
    period TEXT DEFAULT 'weekly',
    FOREIGN KEY (subject_id) REFERENCES subjects(id) ON DELETE CASCADE
);
"""

SEED_SUBJECTS = [
    ("Matemática", "#4f46e5", "Calculator"),
    ("Biologia", "#059669", "Flask"),
    ("História", "#d97706", "Book"),
    ("Programação", "#2563eb", "Code"),
]


def connect(path: str) -> sqlite3.Connection:
    """Open a connection with row access by name and foreign keys enforced."""
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def get_db() -> sqlite3.Connection:
    """Return the DB connection for the current app context, creating if needed."""
    if "db" not in g:
        g.db = connect(current_app.config.get("DATABASE", DEFAULT_DATABASE))
    return g.db


def close_db(e=None) -> None:
    """Teardown handler: close DB connection."""
    db = g.pop("db", None)
    if db is not None:
        db.close()


def init_db(db: sqlite3.Connection | None = None) -> None:
    """Execute schema DDL to create all tables."""
    db = db if db is not None else get_db()
    db.executescript(SCHEMA)
    db.commit()


def seed_subjects(db: sqlite3.Connection | None = None) -> int:
    """Insert the default subjects when the table is empty. Returns rows added."""
    db = db if db is not None else get_db()
    count = db.execute("SELECT COUNT(*) AS count FROM subjects").fetchone()["count"]
    if count:
        return 0
    db.executemany("INSERT INTO subjects (name, color, icon) VALUES (?, ?, ?)", SEED_SUBJECTS)
    db.commit()
    logger.info("Seeded %d default subjects", len(SEED_SUBJECTS))
    return len(SEED_SUBJECTS)


def init_app(app) -> None:
    """Create the schema and seed at startup, and close connections on teardown."""
    app.teardown_appcontext(close_db)
    with app.app_context():
        init_db()
        seed_subjects()
    logger.info("Database ready at %s", app.config.get("DATABASE", DEFAULT_DATABASE))
