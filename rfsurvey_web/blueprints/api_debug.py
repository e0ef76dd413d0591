"""
Debug and observability API blueprint for rfsurvey Web.
"""
from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from rfsurvey_web.auth import require_auth

bp = Blueprint("api_debug", __name__)


@bp.get("/api/debug/health")
def api_debug_health():
    """Liveness plus whether the survey has been analyzed yet."""
    survey = getattr(current_app, "_survey", None)
    return jsonify(
        {
            "ok": True,
            "results_dir": current_app._results_dir,
            "survey_loaded": bool(survey is not None and survey.site is not None),
        }
    )


@bp.get("/api/debug/errors")
def api_debug_errors():
    """Most recent captured request errors, newest last."""
    require_auth()
    limit = request.args.get("limit", default=20, type=int)
    ring = current_app._error_ring
    return jsonify({"errors": ring[-max(1, limit):], "total": len(ring)})
