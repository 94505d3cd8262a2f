"""
StudyFlow — Flask Web Application

Personal study-time tracker: subjects, timed study sessions, aggregate
statistics, goals, and an AI study tutor.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from flask import Flask, Response, jsonify, request

import database
from blueprints import register_blueprints
from extensions import compress, limiter
from schemas import RequestValidationError

logger = logging.getLogger(__name__)


def create_app(test_config: dict[str, Any] | None = None) -> Flask:
    # Frontend assets are served by the core blueprint, not Flask's static route
    app = Flask(__name__, static_folder=None)

    # Load config
    from config import config_by_name, current_env
    if test_config is not None:
        app.config.from_object(config_by_name["testing"])
        app.config.update(test_config)
    else:
        env = current_env()
        cfg = config_by_name.get(env, config_by_name["development"])
        app.config.from_object(cfg)
        if hasattr(cfg, "validate"):
            cfg.validate()

    # Structured logging
    from logging_config import init_logging
    init_logging(app)

    # Response compression
    compress.init_app(app)

    # Pre-built frontend bundle (production)
    if app.config.get("SERVE_BUNDLE"):
        from whitenoise import WhiteNoise
        app.wsgi_app = WhiteNoise(
            app.wsgi_app,
            root=app.config["DIST_DIR"],
            index_file=True,
            max_age=31536000,
        )

    # Schema + seed at startup, connection teardown per app context
    database.init_app(app)

    # Rate limiter (RATELIMIT_ENABLED is off in testing)
    limiter.init_app(app)

    register_blueprints(app)
    register_error_handlers(app)

    from cli import register_cli
    register_cli(app)

    # Security headers
    @app.after_request
    def set_security_headers(response: Response) -> Response:
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    return app


def register_error_handlers(app: Flask) -> None:
    """Map validation and store failures to JSON error responses."""

    @app.errorhandler(RequestValidationError)
    def _invalid_request(e: RequestValidationError):
        return jsonify({"error": e.message, "details": e.details}), 400

    @app.errorhandler(sqlite3.IntegrityError)
    def _integrity_error(e: sqlite3.IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.path, e)
        return jsonify({"error": "Integrity constraint violated"}), 409

    @app.errorhandler(sqlite3.Error)
    def _store_error(e: sqlite3.Error):
        logger.exception("Database error on %s %s", request.method, request.path)
        return jsonify({"error": "Database error"}), 500

    @app.errorhandler(404)
    def _not_found(e):
        if request.path.startswith("/api/"):
            return jsonify({"error": "Not found"}), 404
        return e.get_response()

    @app.errorhandler(405)
    def _method_not_allowed(e):
        if request.path.startswith("/api/"):
            return jsonify({"error": "Method not allowed"}), 405
        return e.get_response()


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=application.config["PORT"], debug=application.config.get("DEBUG", False))
