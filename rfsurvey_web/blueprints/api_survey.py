"""
Survey API blueprint for rfsurvey Web.

Serves hoisted per-point detections, the carrier presence table, Wi-Fi
exports, and the active bandplan.
"""
from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify, request

from rfsurvey.io.wifi import export_rows
from rfsurvey_web.auth import require_auth
from rfsurvey_web.survey import get_survey, point_payload, presence_payload, reload_survey

bp = Blueprint("api_survey", __name__)


def _loaded_survey():
    state = get_survey()
    if state.site is None:
        abort(503, description=state.error or "Survey not loaded")
    return state


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------


@bp.get("/api/points")
def api_points_list():
    """List survey points with their hoisted detections."""
    require_auth()
    state = _loaded_survey()
    return jsonify(
        {
            "site": state.site.ref,
            "loaded_at": state.loaded_at,
            "points": [point_payload(point) for point in state.site.points],
        }
    )


@bp.get("/api/points/<ref>")
def api_point_detail(ref: str):
    """One point including per-trace detail."""
    require_auth()
    state = _loaded_survey()
    for point in state.site.points:
        if point.ref == ref:
            return jsonify(point_payload(point, detail=True))
    abort(404, description="Point not found")


# ---------------------------------------------------------------------------
# Presence / Wi-Fi / bandplan
# ---------------------------------------------------------------------------


@bp.get("/api/presence")
def api_presence():
    """Per-point, per-carrier GSM/LTE presence."""
    require_auth()
    return jsonify(presence_payload(_loaded_survey()))


@bp.get("/api/wifi")
def api_wifi():
    """Wi-Fi networks; strongest sighting per SSID/BSSID unless ?all=1."""
    require_auth()
    state = _loaded_survey()
    keep_all = request.args.get("all", type=int) == 1
    return jsonify({"networks": export_rows(state.site, dedupe=not keep_all)})


@bp.get("/api/bandplan")
def api_bandplan():
    require_auth()
    return jsonify(current_app._bandplan.as_dict())


# ---------------------------------------------------------------------------
# Reload
# ---------------------------------------------------------------------------


@bp.post("/api/reload")
def api_reload():
    """Re-read the results directory and re-run detection."""
    require_auth()
    state = reload_survey()
    if state.site is None:
        abort(503, description=state.error or "Survey not loaded")
    stats = state.stats
    return jsonify(
        {
            "loaded_at": state.loaded_at,
            "points": len(state.site.points),
            "traces": stats.traces,
            "eligible": stats.eligible,
            "failed": stats.failed,
            "lte_signals": stats.lte_signals,
            "gsm_signals": stats.gsm_signals,
        }
    )
