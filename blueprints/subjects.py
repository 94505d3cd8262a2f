"""Subject routes — list, create, delete (cascades to sessions and goals)."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify

from database import get_db
from db_stores import SubjectStoreDB
from schemas import SubjectIn, parse_body

logger = logging.getLogger(__name__)

bp = Blueprint("subjects", __name__)


@bp.route("/api/subjects")
def api_subjects_list():
    return jsonify(SubjectStoreDB(get_db()).all())


@bp.route("/api/subjects", methods=["POST"])
def api_subjects_create():
    body = parse_body(SubjectIn)
    subject = SubjectStoreDB(get_db()).create(body.name, body.color, body.icon)
    logger.info("Created subject %s (%s)", subject["id"], subject["name"])
    return jsonify(subject)


@bp.route("/api/subjects/<int:subject_id>", methods=["DELETE"])
def api_subjects_delete(subject_id):
    SubjectStoreDB(get_db()).delete(subject_id)
    logger.info("Deleted subject %s", subject_id)
    return jsonify({"success": True})
