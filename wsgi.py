"""WSGI entry point: ``gunicorn wsgi:app``."""

import logging
import sys

from app import create_app

try:
    app = create_app()
except Exception:
    logging.getLogger(__name__).exception("StudyFlow failed to start")
    sys.exit(1)
