"""
Application factory for rfsurvey Web.

Wires together blueprints, the cached survey analysis, error handling, and
request middleware.
"""
from __future__ import annotations

import traceback as tb
from datetime import datetime, timezone
from time import perf_counter
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from rfsurvey.io.bandplan import CarrierBandplan
from rfsurvey_web.config import ANALYSIS_WORKERS, BANDPLAN_PATH, ERROR_RING_MAX, RESULTS_DIR


def create_app(results_dir: Optional[str] = None, bandplan_path: Optional[str] = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # ------------------------------------------------------------------
    # App-level state
    # ------------------------------------------------------------------
    app._results_dir = results_dir or RESULTS_DIR
    app._bandplan = CarrierBandplan(bandplan_path or BANDPLAN_PATH or None)
    app._workers = ANALYSIS_WORKERS
    app._survey = None

    # ------------------------------------------------------------------
    # Error ring buffer (exposed via api_debug blueprint)
    # ------------------------------------------------------------------
    app._error_ring = []
    app._error_ring_max = ERROR_RING_MAX

    # ------------------------------------------------------------------
    # Request timing middleware
    # ------------------------------------------------------------------

    @app.before_request
    def log_request_start():
        request._start_time = perf_counter()

    @app.after_request
    def log_request_end(response):
        if hasattr(request, "_start_time"):
            duration_ms = (perf_counter() - request._start_time) * 1000
            if duration_ms > 500 or response.status_code >= 400:
                app.logger.debug(
                    "%s %s -> %d (%.1fms)",
                    request.method,
                    request.path,
                    response.status_code,
                    duration_ms,
                )
        return response

    # ------------------------------------------------------------------
    # Global error handler -> ring buffer
    # ------------------------------------------------------------------

    @app.errorhandler(Exception)
    def capture_error_to_ring(exc):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description}), exc.code
        entry = {
            "ts": datetime.now(timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "path": request.path,
            "method": request.method,
            "error": str(exc),
            "type": type(exc).__name__,
            "traceback": tb.format_exc(),
        }
        app._error_ring.append(entry)
        while len(app._error_ring) > app._error_ring_max:
            app._error_ring.pop(0)
        return jsonify({"error": "internal error", "type": entry["type"]}), 500

    # ------------------------------------------------------------------
    # Register blueprints
    # ------------------------------------------------------------------
    from rfsurvey_web.blueprints.api_debug import bp as api_debug_bp
    from rfsurvey_web.blueprints.api_survey import bp as api_survey_bp

    app.register_blueprint(api_debug_bp)
    app.register_blueprint(api_survey_bp)

    return app
