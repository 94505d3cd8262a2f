"""Tests for goals: routes, period windows, target-vs-actual progress."""

import json
from datetime import date

import pytest

from db_stores import GoalStoreDB, parse_session_day, period_bounds


def _post_goal(client, **body):
    return client.post("/api/goals", data=json.dumps(body), content_type="application/json")


class TestGoalRoutes:
    def test_create_and_list(self, client):
        resp = _post_goal(client, subject_id=1, target_hours=5, period="weekly")
        assert resp.status_code == 200
        goal = resp.get_json()
        assert goal["period"] == "weekly"
        listed = client.get("/api/goals").get_json()
        assert len(listed) == 1
        assert listed[0]["subject_name"] == "Matemática"
        assert listed[0]["target_hours"] == 5

    def test_period_defaults_to_weekly(self, client):
        assert _post_goal(client, subject_id=1, target_hours=2).get_json()["period"] == "weekly"

    @pytest.mark.parametrize("body", [
        {"subject_id": 1, "target_hours": 0},
        {"subject_id": 1, "target_hours": 2, "period": "monthly"},
        {"target_hours": 2},
    ])
    def test_invalid_goal_rejected(self, client, body):
        assert _post_goal(client, **body).status_code == 400

    def test_unknown_subject_conflict(self, client):
        assert _post_goal(client, subject_id=999, target_hours=1).status_code == 409

    def test_delete(self, client):
        goal = _post_goal(client, subject_id=1, target_hours=5).get_json()
        resp = client.delete(f"/api/goals/{goal['id']}")
        assert resp.get_json() == {"success": True}
        assert client.get("/api/goals").get_json() == []

    def test_progress_endpoint_shape(self, client):
        _post_goal(client, subject_id=3, target_hours=1, period="daily")
        progress = client.get("/api/goals/progress").get_json()
        assert len(progress) == 1
        entry = progress[0]
        assert entry["target_seconds"] == 3600
        assert entry["actual_seconds"] == 0
        assert entry["met"] is False
        assert entry["period_start"] == entry["period_end"]


class TestPeriods:
    def test_daily_bounds(self):
        assert period_bounds("daily", date(2026, 1, 14)) == (date(2026, 1, 14), date(2026, 1, 14))

    def test_weekly_bounds_start_monday(self):
        assert period_bounds("weekly", date(2026, 1, 14)) == (date(2026, 1, 12), date(2026, 1, 18))

    def test_weekly_bounds_on_sunday(self):
        assert period_bounds("weekly", date(2026, 1, 18)) == (date(2026, 1, 12), date(2026, 1, 18))

    def test_session_day_normalised_to_utc(self):
        assert parse_session_day("2026-01-11T23:30:00-03:00") == date(2026, 1, 12)
        assert parse_session_day("2026-01-11T23:30:00.000Z") == date(2026, 1, 11)
        assert parse_session_day("2026-01-11T23:30:00") == date(2026, 1, 11)


class TestGoalProgress:
    def test_weekly_progress_counts_current_week_only(self, db, seeded_sessions):
        store = GoalStoreDB(db)
        store.create(subject_id=1, target_hours=1, period="weekly")

        this_week = store.progress(today=date(2026, 1, 14))[0]
        assert this_week["actual_seconds"] == 600

        last_week = store.progress(today=date(2026, 1, 10))[0]
        assert last_week["actual_seconds"] == 1200

    def test_daily_progress_ratio(self, db, seeded_sessions):
        store = GoalStoreDB(db)
        store.create(subject_id=2, target_hours=1, period="daily")
        entry = store.progress(today=date(2026, 1, 11))[0]
        assert entry["actual_seconds"] == 1800
        assert entry["ratio"] == 0.5
        assert entry["met"] is False

    def test_goal_met(self, db, seeded_sessions):
        store = GoalStoreDB(db)
        store.create(subject_id=1, target_hours=1, period="weekly")
        db.execute(
            "INSERT INTO sessions (subject_id, duration, date) VALUES (1, 3000, '2026-01-13T10:00:00Z')"
        )
        db.commit()
        entry = store.progress(today=date(2026, 1, 14))[0]
        assert entry["actual_seconds"] == 3600
        assert entry["met"] is True
