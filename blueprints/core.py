"""Core routes — health checks and frontend serving (unbundled or pre-built)."""

from __future__ import annotations

import logging
import os
import time

from flask import Blueprint, abort, current_app, jsonify, send_from_directory

from database import get_db

logger = logging.getLogger(__name__)

bp = Blueprint("core", __name__)


# ── Health checks ─────────────────────────────────────────

_start_time = time.time()


@bp.route("/health")
def health():
    uptime = int(time.time() - _start_time)
    return jsonify({
        "status": "ok",
        "uptime_seconds": uptime,
        "ai_configured": bool(current_app.config.get("GEMINI_API_KEY")),
    })


@bp.route("/ready")
def ready():
    try:
        get_db().execute("SELECT 1").fetchone()
        return jsonify({"status": "ready"}), 200
    except Exception as exc:
        logger.error("Readiness check failed: %s", exc, exc_info=True)
        return jsonify({"status": "not_ready"}), 503


# ── Frontend ──────────────────────────────────────────────
# In production WhiteNoise serves files from the bundle directly; anything it
# doesn't find lands here and gets the SPA entry point.

def _asset_root() -> str:
    key = "DIST_DIR" if current_app.config.get("SERVE_BUNDLE") else "STATIC_DIR"
    return current_app.config[key]


@bp.route("/", defaults={"path": ""})
@bp.route("/<path:path>")
def frontend(path: str):
    if path.startswith("api/"):
        abort(404)
    root = _asset_root()
    if path and os.path.isfile(os.path.join(root, path)):
        return send_from_directory(root, path)
    if not os.path.isfile(os.path.join(root, "index.html")):
        abort(404)
    return send_from_directory(root, "index.html")
