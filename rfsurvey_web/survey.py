"""
Cached survey analysis attached to the Flask app.

The results directory is parsed and analyzed on first use; reload_survey()
re-runs the whole pipeline.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import current_app

from rfsurvey.detection.config import DetectionConfig
from rfsurvey.detection.engine import DetectionEngine, EngineStats
from rfsurvey.detection.types import Point, Site
from rfsurvey.io.bandplan import CarrierBandplan
from rfsurvey.io.discovery import load_site
from rfsurvey.report.presence import presence_table
from rfsurvey.util.logging import get_logger

logger = get_logger(__name__)

_lock = threading.Lock()


@dataclass
class SurveyState:
    site: Optional[Site] = None
    bandplan: CarrierBandplan = field(default_factory=CarrierBandplan)
    stats: EngineStats = field(default_factory=EngineStats)
    loaded_at: Optional[str] = None
    error: Optional[str] = None


def _analyze(results_dir: str, bandplan: CarrierBandplan, workers: int) -> SurveyState:
    state = SurveyState(bandplan=bandplan)
    try:
        site = load_site(results_dir)
    except FileNotFoundError as exc:
        logger.warning("Survey not loaded: %s", exc)
        state.error = str(exc)
        return state
    engine = DetectionEngine(bandplan, DetectionConfig.from_env())
    state.stats = engine.process_site(site, max_workers=workers)
    state.site = site
    state.loaded_at = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    return state


def reload_survey() -> SurveyState:
    app = current_app._get_current_object()
    with _lock:
        app._survey = _analyze(app._results_dir, app._bandplan, app._workers)
        return app._survey


def get_survey() -> SurveyState:
    app = current_app._get_current_object()
    state = getattr(app, "_survey", None)
    if state is not None:
        return state
    with _lock:
        # another request may have finished the analysis while we waited
        if app._survey is None:
            app._survey = _analyze(app._results_dir, app._bandplan, app._workers)
        return app._survey


def point_payload(point: Point, detail: bool = False) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "ref": point.ref,
        "snapshots": len(point.snapshots),
        "traces": len(point.traces()),
        "networks": len(point.networks),
        "signal_count": len(point.detected_signals),
        "signals": [signal.as_dict() for signal in point.detected_signals],
    }
    if detail:
        payload["snapshot_detail"] = [
            {
                "ref": snapshot.ref,
                "traces": [
                    {
                        "trace_mode": trace.parameter("Trace Mode"),
                        "center_frequency": trace.parameter("Center Frequency"),
                        "span": trace.parameter("Span"),
                        "records": len(trace.records),
                        "noise_floor_db": trace.min_amplitude,
                        "peak_db": trace.max_amplitude,
                        "signals": [signal.as_dict() for signal in trace.detected_signals],
                    }
                    for trace in snapshot.traces
                ],
            }
            for snapshot in point.snapshots
        ]
    return payload


def presence_payload(state: SurveyState) -> Dict[str, Any]:
    carriers = state.bandplan.carriers
    table = presence_table(state.site, carriers) if state.site is not None else {}
    return {"carriers": carriers, "points": table}
