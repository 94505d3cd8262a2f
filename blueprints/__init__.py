"""
Blueprint registration for StudyFlow.

All blueprints are registered without URL prefixes; routes carry their full
``/api/...`` paths. The frontend catch-all in ``core`` is registered last.
"""

from __future__ import annotations


def register_blueprints(app):
    from blueprints.subjects import bp as subjects_bp
    from blueprints.study import bp as study_bp
    from blueprints.goals import bp as goals_bp
    from blueprints.ai import bp as ai_bp
    from blueprints.core import bp as core_bp

    app.register_blueprint(subjects_bp)
    app.register_blueprint(study_bp)
    app.register_blueprint(goals_bp)
    app.register_blueprint(ai_bp)
    app.register_blueprint(core_bp)
