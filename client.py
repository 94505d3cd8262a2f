"""
StudyFlow HTTP client.

Thin wrapper over the REST API used by the timer and dashboard. Every call
is a single round trip; non-2xx responses raise ``httpx.HTTPStatusError``.
"""

from __future__ import annotations

import httpx


class StudyflowClient:
    """Client for a running StudyFlow server."""

    def __init__(self, base_url: str = "http://localhost:3000", transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(base_url=self.base_url, transport=transport)

    def _get(self, path: str):
        resp = self.client.get(path)
        resp.raise_for_status()
        return resp.json()

    def _post(self, path: str, payload: dict):
        resp = self.client.post(path, json=payload)
        resp.raise_for_status()
        return resp.json()

    # ── Subjects ──

    def list_subjects(self) -> list[dict]:
        return self._get("/api/subjects")

    def create_subject(self, name: str, color: str = "#4f46e5", icon: str = "Book") -> dict:
        return self._post("/api/subjects", {"name": name, "color": color, "icon": icon})

    def delete_subject(self, subject_id: int) -> dict:
        resp = self.client.delete(f"/api/subjects/{subject_id}")
        resp.raise_for_status()
        return resp.json()

    # ── Sessions & stats ──

    def list_sessions(self) -> list[dict]:
        return self._get("/api/sessions")

    def create_session(self, subject_id: int, duration: int, date: str, notes: str = "") -> dict:
        return self._post("/api/sessions", {
            "subject_id": subject_id,
            "duration": duration,
            "date": date,
            "notes": notes,
        })

    def stats(self) -> list[dict]:
        return self._get("/api/stats")

    # ── Tutor ──

    def ask_tutor(self, message: str, history: list[dict] | None = None) -> str:
        data = self._post("/api/tutor/message", {"message": message, "history": history or []})
        return data["response"]

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
