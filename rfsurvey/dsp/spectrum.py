"""Working copy of a trace's spectrum used by the detectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from rfsurvey.detection.errors import DegenerateTraceError, MissingParameterError
from rfsurvey.detection.types import Trace


def suppress_window(amps_db: np.ndarray, start_idx: int, end_idx: int, level_db: float) -> int:
    """Overwrite amps_db[start_idx..end_idx] (inclusive) with level_db.

    Indices beyond the array edges are skipped. Returns the number of bins written.
    """
    lo = max(int(start_idx), 0)
    hi = min(int(end_idx), amps_db.size - 1)
    if hi < lo:
        return 0
    amps_db[lo : hi + 1] = level_db
    return hi - lo + 1


@dataclass
class WorkingSpectrum:
    freqs_hz: np.ndarray
    amps_db: np.ndarray
    span_hz: float

    @classmethod
    def from_trace(cls, trace: Trace) -> "WorkingSpectrum":
        if not trace.records:
            raise DegenerateTraceError("trace has no records")
        raw_span = trace.parameter("Span")
        if raw_span is None:
            raise MissingParameterError("Span")
        try:
            span_hz = float(str(raw_span).strip())
        except ValueError:
            raise MissingParameterError("Span", f"is not numeric ({raw_span!r})") from None
        if span_hz <= 0.0:
            raise MissingParameterError("Span", f"must be positive ({raw_span!r})")
        freqs = np.fromiter((rec.frequency_hz for rec in trace.records), dtype=np.int64, count=len(trace.records))
        amps = np.fromiter((rec.amplitude_db for rec in trace.records), dtype=np.float64, count=len(trace.records))
        return cls(freqs_hz=freqs, amps_db=amps, span_hz=span_hz)

    @property
    def size(self) -> int:
        return int(self.amps_db.size)

    @property
    def step_hz(self) -> float:
        return self.span_hz / float(self.size)

    def covers(self, freq_hz: float) -> bool:
        return float(self.freqs_hz[0]) <= freq_hz <= float(self.freqs_hz[-1])

    def nearest_index(self, freq_hz: float) -> Optional[int]:
        """First bin closer than one step to freq_hz, or None."""
        hits = np.flatnonzero(np.abs(self.freqs_hz.astype(np.float64) - freq_hz) < self.step_hz)
        if hits.size == 0:
            return None
        return int(hits[0])

    def clamp(self, start_idx: int, end_idx: int) -> Tuple[int, int]:
        return max(int(start_idx), 0), min(int(end_idx), self.size - 1)

    def window(self, start_idx: int, end_idx: int) -> np.ndarray:
        lo, hi = self.clamp(start_idx, end_idx)
        if hi < lo:
            return self.amps_db[0:0]
        return self.amps_db[lo : hi + 1]

    def peak_index(self) -> int:
        return int(np.argmax(self.amps_db))
