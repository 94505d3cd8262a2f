"""AI tutor routes: greeting and message exchange."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from extensions import limiter
from schemas import TutorMessageIn, parse_body

bp = Blueprint("ai", __name__)


@bp.route("/api/tutor/greeting")
def api_tutor_greeting():
    from tutor import GREETING
    return jsonify({"role": "assistant", "content": GREETING})


@bp.route("/api/tutor/message", methods=["POST"])
@limiter.limit(lambda: current_app.config.get("TUTOR_RATE_LIMIT", "30 per minute"))
def api_tutor_message():
    from tutor import ask_tutor

    body = parse_body(TutorMessageIn)
    response = ask_tutor(
        body.message,
        [turn.model_dump() for turn in body.history],
        api_key=current_app.config.get("GEMINI_API_KEY", ""),
        model=current_app.config.get("GEMINI_MODEL", "gemini-2.0-flash"),
    )
    return jsonify({"role": "assistant", "content": response, "response": response})
