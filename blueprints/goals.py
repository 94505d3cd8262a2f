"""Goal routes: study-time targets and target-vs-actual progress."""

from __future__ import annotations

from flask import Blueprint, jsonify

from database import get_db
from db_stores import GoalStoreDB
from schemas import GoalIn, parse_body

bp = Blueprint("goals", __name__)


@bp.route("/api/goals")
def api_goals_list():
    return jsonify(GoalStoreDB(get_db()).all())


@bp.route("/api/goals", methods=["POST"])
def api_goals_create():
    body = parse_body(GoalIn)
    goal = GoalStoreDB(get_db()).create(body.subject_id, body.target_hours, body.period)
    return jsonify(goal)


@bp.route("/api/goals/<int:goal_id>", methods=["DELETE"])
def api_goals_delete(goal_id):
    GoalStoreDB(get_db()).delete(goal_id)
    return jsonify({"success": True})


@bp.route("/api/goals/progress")
def api_goals_progress():
    return jsonify(GoalStoreDB(get_db()).progress())
