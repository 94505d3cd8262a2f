"""
Application configuration: environment-aware settings.

All environment variables are documented here. See .env.example for a template.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent

load_dotenv(BASE_DIR / ".env")


class BaseConfig:
    # Core Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-change-in-production")
    # Single-file SQLite database
    DATABASE = os.environ.get("DATABASE_URL", str(BASE_DIR / "studyflow.db"))
    PORT = int(os.environ.get("PORT", "3000"))

    # Frontend assets: unbundled sources in development, pre-built bundle in production
    STATIC_DIR = os.environ.get("STATIC_DIR", str(BASE_DIR / "static"))
    DIST_DIR = os.environ.get("DIST_DIR", str(BASE_DIR / "dist"))
    SERVE_BUNDLE = False

    # AI tutor
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "") or os.environ.get("GOOGLE_API_KEY", "")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
    TUTOR_RATE_LIMIT = os.environ.get("TUTOR_RATE_LIMIT", "30 per minute")

    # CLI client
    API_URL = os.environ.get("STUDYFLOW_API_URL", "http://localhost:3000")

    # Logging
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")  # "json" or "text"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Response compression
    COMPRESS_MIMETYPES = [
        "text/html", "text/css", "text/javascript",
        "application/json", "application/javascript",
    ]
    COMPRESS_MIN_SIZE = 500
    COMPRESS_ALGORITHM = "gzip"

    # Rate limiting. Always set: the shared limiter takes its on/off state from each app.
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json")
    SERVE_BUNDLE = True

    @classmethod
    def validate(cls):
        """Fail fast on missing or insecure configuration in production."""
        errors: list[str] = []

        if cls.SECRET_KEY in ("dev-key-change-in-production", ""):
            errors.append("SECRET_KEY must be set to a secure value in production.")

        if not Path(cls.DIST_DIR, "index.html").exists():
            errors.append(f"Frontend bundle not found at {cls.DIST_DIR}; build it before starting.")

        if not cls.GEMINI_API_KEY:
            warnings.warn("GEMINI_API_KEY is not set; the AI tutor will only apologise.")

        if errors:
            raise RuntimeError(
                "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )


class TestingConfig(BaseConfig):
    TESTING = True
    RATELIMIT_ENABLED = False
    GEMINI_API_KEY = ""


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def current_env() -> str:
    """Return the configured environment name (FLASK_ENV, then STUDYFLOW_ENV)."""
    return os.environ.get("FLASK_ENV") or os.environ.get("STUDYFLOW_ENV") or "development"
