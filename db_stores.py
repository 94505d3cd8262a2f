"""
DB-backed store classes for StudyFlow.

Each store wraps an injected sqlite3 connection (see ``database.get_db``)
and returns plain dicts ready for ``jsonify``. Every write is a single
statement; referential integrity is left to SQLite's foreign keys.
"""

from __future__ import annotations

import sqlite3
from datetime import date, datetime, timedelta, timezone

SECONDS_PER_HOUR = 3600


def _row_to_dict(row: sqlite3.Row) -> dict:
    return {key: row[key] for key in row.keys()}


# ── Subjects ─────────────────────────────────────────────────────────


class SubjectStoreDB:
    """Subjects: user-defined study categories."""

    def __init__(self, db: sqlite3.Connection):
        self.db = db

    def all(self) -> list[dict]:
        rows = self.db.execute("SELECT id, name, color, icon FROM subjects ORDER BY id").fetchall()
        return [_row_to_dict(r) for r in rows]

    def get(self, subject_id: int) -> dict | None:
        row = self.db.execute(
            "SELECT id, name, color, icon FROM subjects WHERE id = ?", (subject_id,)
        ).fetchone()
        return _row_to_dict(row) if row else None

    def create(self, name: str, color: str, icon: str) -> dict:
        cur = self.db.execute(
            "INSERT INTO subjects (name, color, icon) VALUES (?, ?, ?)",
            (name, color, icon),
        )
        self.db.commit()
        return {"id": cur.lastrowid, "name": name, "color": color, "icon": icon}

    def delete(self, subject_id: int) -> None:
        """Delete a subject; its sessions and goals go with it. Missing ids are a no-op."""
        self.db.execute("DELETE FROM subjects WHERE id = ?", (subject_id,))
        self.db.commit()


# ── Sessions ─────────────────────────────────────────────────────────


class SessionStoreDB:
    """Completed study sessions. Immutable once written."""

    def __init__(self, db: sqlite3.Connection):
        self.db = db

    def all(self) -> list[dict]:
        """All sessions joined with their subject's name and color, newest first."""
        rows = self.db.execute(
            "SELECT s.id, s.subject_id, s.duration, s.date, s.notes, "
            "sub.name AS subject_name, sub.color AS subject_color "
            "FROM sessions s "
            "JOIN subjects sub ON s.subject_id = sub.id "
            "ORDER BY s.date DESC, s.id DESC"
        ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def for_subject(self, subject_id: int) -> list[dict]:
        rows = self.db.execute(
            "SELECT id, subject_id, duration, date, notes FROM sessions "
            "WHERE subject_id = ? ORDER BY date DESC",
            (subject_id,),
        ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def create(self, subject_id: int, duration: int, date: str, notes: str | None = None) -> dict:
        """Insert a session. Raises sqlite3.IntegrityError for an unknown subject."""
        cur = self.db.execute(
            "INSERT INTO sessions (subject_id, duration, date, notes) VALUES (?, ?, ?, ?)",
            (subject_id, duration, date, notes),
        )
        self.db.commit()
        return {
            "id": cur.lastrowid,
            "subject_id": subject_id,
            "duration": duration,
            "date": date,
            "notes": notes,
        }

    def stats(self) -> list[dict]:
        """Total study seconds per subject. Subjects without sessions are omitted."""
        rows = self.db.execute(
            "SELECT sub.name, SUM(s.duration) AS total_duration, sub.color "
            "FROM sessions s "
            "JOIN subjects sub ON s.subject_id = sub.id "
            "GROUP BY sub.id "
            "ORDER BY sub.id"
        ).fetchall()
        return [_row_to_dict(r) for r in rows]


# ── Goals ────────────────────────────────────────────────────────────


def parse_session_day(value: str) -> date:
    """Calendar day (UTC) of a stored session timestamp."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def period_bounds(period: str, today: date) -> tuple[date, date]:
    """Inclusive first and last day of the goal period containing ``today``."""
    if period == "daily":
        return today, today
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


class GoalStoreDB:
    """Study-time targets per subject, daily or weekly."""

    def __init__(self, db: sqlite3.Connection):
        self.db = db

    def all(self) -> list[dict]:
        rows = self.db.execute(
            "SELECT g.id, g.subject_id, g.target_hours, g.period, "
            "sub.name AS subject_name, sub.color AS subject_color "
            "FROM goals g "
            "JOIN subjects sub ON g.subject_id = sub.id "
            "ORDER BY g.id"
        ).fetchall()
        return [_row_to_dict(r) for r in rows]

    def create(self, subject_id: int, target_hours: int, period: str = "weekly") -> dict:
        cur = self.db.execute(
            "INSERT INTO goals (subject_id, target_hours, period) VALUES (?, ?, ?)",
            (subject_id, target_hours, period),
        )
        self.db.commit()
        return {
            "id": cur.lastrowid,
            "subject_id": subject_id,
            "target_hours": target_hours,
            "period": period,
        }

    def delete(self, goal_id: int) -> None:
        self.db.execute("DELETE FROM goals WHERE id = ?", (goal_id,))
        self.db.commit()

    def progress(self, today: date | None = None) -> list[dict]:
        """Compare each goal's target with the time studied in its current period."""
        today = today or datetime.now(timezone.utc).date()
        sessions = SessionStoreDB(self.db)
        result = []
        for goal in self.all():
            start, end = period_bounds(goal["period"], today)
            actual = sum(
                s["duration"]
                for s in sessions.for_subject(goal["subject_id"])
                if start <= parse_session_day(s["date"]) <= end
            )
            target = goal["target_hours"] * SECONDS_PER_HOUR
            result.append({
                **goal,
                "period_start": start.isoformat(),
                "period_end": end.isoformat(),
                "target_seconds": target,
                "actual_seconds": actual,
                "ratio": round(actual / target, 3) if target else 0.0,
                "met": actual >= target,
            })
        return result
