"""Detection engine running the gate, LTE and GSM detectors over survey traces."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from rfsurvey.detection.config import DetectionConfig
from rfsurvey.detection.eligibility import is_eligible
from rfsurvey.detection.errors import DegenerateTraceError, MissingParameterError
from rfsurvey.detection.gsm import detect_gsm
from rfsurvey.detection.lte import detect_lte
from rfsurvey.detection.types import DetectedSignal, Point, Site, Trace
from rfsurvey.dsp.spectrum import WorkingSpectrum
from rfsurvey.io.bandplan import CarrierBandplan
from rfsurvey.util.event_log import EventLog
from rfsurvey.util.logging import get_logger

logger = get_logger(__name__)


@dataclass
class EngineStats:
    traces: int = 0
    eligible: int = 0
    failed: int = 0
    lte_signals: int = 0
    gsm_signals: int = 0

    def merge(self, other: "EngineStats") -> None:
        self.traces += other.traces
        self.eligible += other.eligible
        self.failed += other.failed
        self.lte_signals += other.lte_signals
        self.gsm_signals += other.gsm_signals

    @property
    def skipped(self) -> int:
        return self.traces - self.eligible


class DetectionEngine:
    def __init__(
        self,
        bandplan: Optional[CarrierBandplan] = None,
        config: Optional[DetectionConfig] = None,
        *,
        event_log: Optional[EventLog] = None,
    ):
        self.bandplan = bandplan or CarrierBandplan()
        self.config = config or DetectionConfig()
        self.event_log = event_log

    def _log(self, event_log: Optional[EventLog], event: str, **fields: Any) -> None:
        if event_log is None:
            return
        event_log.log(event, **fields)

    def process_trace(
        self,
        trace: Trace,
        stats: Optional[EngineStats] = None,
        *,
        event_log: Optional[EventLog] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> List[DetectedSignal]:
        """Run the full detection sequence on one trace.

        Raw records are never modified; the suppressed amplitudes end up in
        trace.residual. Structural problems leave trace.detected_signals empty.
        ``context`` (point, snapshot, trace_index) is attached to log records.
        """
        stats = stats if stats is not None else EngineStats()
        event_log = event_log if event_log is not None else self.event_log
        stats.traces += 1
        trace.detected_signals = []
        trace.residual = None

        if not is_eligible(trace, self.bandplan.allowed_centers_hz):
            self._log(
                event_log,
                "trace_skip",
                trace_mode=trace.parameter("Trace Mode"),
                center_frequency=trace.parameter("Center Frequency"),
            )
            return trace.detected_signals

        stats.eligible += 1
        try:
            noisefloor, _ = trace.ensure_extrema()
            spectrum = WorkingSpectrum.from_trace(trace)
        except (DegenerateTraceError, MissingParameterError) as exc:
            stats.failed += 1
            logger.warning("Skipping trace: %s", exc, extra={**(context or {}), "error_type": type(exc).__name__})
            self._log(event_log, "trace_error", error=str(exc), error_type=type(exc).__name__)
            return trace.detected_signals

        signals: List[DetectedSignal] = []
        for band_class in self.bandplan.band_classes:
            signals.extend(detect_lte(spectrum, band_class, noisefloor, self.config, event_log=event_log))
        lte_count = len(signals)
        signals.extend(
            detect_gsm(spectrum, noisefloor, self.bandplan.gsm_sub_bands, self.config, event_log=event_log)
        )

        stats.lte_signals += lte_count
        stats.gsm_signals += len(signals) - lte_count
        trace.detected_signals = signals
        trace.residual = spectrum.amps_db
        return signals

    def process_point(self, point: Point) -> EngineStats:
        """Analyze every trace of the point and hoist the results onto it."""
        stats = EngineStats()
        hoisted: List[DetectedSignal] = []
        for snapshot in point.snapshots:
            for trace_index, trace in enumerate(snapshot.traces):
                context = {"point": point.ref, "snapshot": snapshot.ref, "trace_index": trace_index}
                event_log = self.event_log.bind(**context) if self.event_log is not None else None
                hoisted.extend(self.process_trace(trace, stats, event_log=event_log, context=context))
        point.detected_signals = hoisted
        logger.info(
            "Point %s: %d traces, %d eligible, %d LTE / %d GSM signals",
            point.ref,
            stats.traces,
            stats.eligible,
            stats.lte_signals,
            stats.gsm_signals,
        )
        self._log(
            self.event_log,
            "point_done",
            point=point.ref,
            traces=stats.traces,
            eligible=stats.eligible,
            failed=stats.failed,
            signals=len(hoisted),
        )
        return stats

    def process_site(self, site: Site, max_workers: Optional[int] = None) -> EngineStats:
        """Analyze all points; points run in parallel when max_workers > 1."""
        total = EngineStats()
        if max_workers and max_workers > 1 and len(site.points) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                results = list(pool.map(self.process_point, site.points))
        else:
            results = [self.process_point(point) for point in site.points]
        for stats in results:
            total.merge(stats)
        return total
