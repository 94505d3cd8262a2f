"""Study session routes — session log, session creation, per-subject stats."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify

from database import get_db
from db_stores import SessionStoreDB
from schemas import SessionIn, parse_body

logger = logging.getLogger(__name__)

bp = Blueprint("study", __name__)


@bp.route("/api/sessions")
def api_sessions_list():
    return jsonify(SessionStoreDB(get_db()).all())


@bp.route("/api/sessions", methods=["POST"])
def api_sessions_create():
    body = parse_body(SessionIn)
    session = SessionStoreDB(get_db()).create(
        subject_id=body.subject_id,
        duration=body.duration,
        date=body.date,
        notes=body.notes,
    )
    logger.info(
        "Recorded %ss session for subject %s", session["duration"], session["subject_id"]
    )
    return jsonify(session)


@bp.route("/api/stats")
def api_stats():
    return jsonify(SessionStoreDB(get_db()).stats())
