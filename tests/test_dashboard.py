"""Tests for the HTTP client and dashboard aggregation."""

import threading
from unittest.mock import MagicMock

import httpx
import pytest

from dashboard import DashboardSummary, load_dashboard, summarize


class TestStudyflowClient:
    def test_subject_round_trip(self, api_client):
        created = api_client.create_subject("Física", color="#111111", icon="Book")
        assert created["name"] == "Física"
        assert sum(1 for s in api_client.list_subjects() if s["id"] == created["id"]) == 1
        assert api_client.delete_subject(created["id"]) == {"success": True}

    def test_create_session_and_stats(self, api_client):
        api_client.create_session(1, 120, "2026-01-01T10:00:00Z", notes="")
        api_client.create_session(1, 80, "2026-01-02T10:00:00Z")
        assert api_client.stats() == [{"name": "Matemática", "total_duration": 200, "color": "#4f46e5"}]
        assert [s["duration"] for s in api_client.list_sessions()] == [80, 120]

    def test_error_status_raises(self, api_client):
        with pytest.raises(httpx.HTTPStatusError) as exc:
            api_client.create_session(999, 60, "2026-01-01T10:00:00Z")
        assert exc.value.response.status_code == 409

    def test_tutor_apology_when_unconfigured(self, api_client):
        from tutor import APOLOGY
        assert api_client.ask_tutor("Oi") == APOLOGY


class TestSummarize:
    def test_totals(self):
        stats = [
            {"name": "Matemática", "total_duration": 5400, "color": "#4f46e5"},
            {"name": "Biologia", "total_duration": 1800, "color": "#059669"},
        ]
        summary = summarize(stats, [{"id": 1}, {"id": 2}, {"id": 3}])
        assert summary.total_seconds == 7200
        assert summary.total_hours == 2.0
        assert summary.subject_count == 2
        assert summary.session_count == 3

    def test_hours_rounded_to_one_decimal(self):
        summary = summarize([{"name": "x", "total_duration": 4000, "color": ""}], [])
        assert summary.total_hours == 1.1

    def test_empty(self):
        assert summarize([], []) == DashboardSummary()


class TestLoadDashboard:
    def test_against_live_app(self, api_client, seeded_sessions):
        summary = load_dashboard(api_client)
        assert summary.total_seconds == 3600
        assert summary.subject_count == 2
        assert summary.session_count == 3
        assert summary.to_dict()["sessions"][0]["date"] == "2026-01-12T09:00:00.000Z"

    def test_fetches_run_concurrently(self):
        barrier = threading.Barrier(2, timeout=5)
        client = MagicMock()

        def stats():
            barrier.wait()
            return [{"name": "a", "total_duration": 60, "color": ""}]

        def sessions():
            barrier.wait()
            return [{"id": 1}]

        client.stats.side_effect = stats
        client.list_sessions.side_effect = sessions
        summary = load_dashboard(client)
        assert summary.total_seconds == 60
        assert summary.session_count == 1

    def test_failure_yields_empty_summary(self):
        client = MagicMock()
        client.stats.return_value = []
        client.list_sessions.side_effect = httpx.ConnectError("refused")
        assert load_dashboard(client) == DashboardSummary()
