"""Noise floor and peak extraction over raw trace records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import numpy as np

from rfsurvey.detection.errors import DegenerateTraceError

if TYPE_CHECKING:  # pragma: no cover - type hint only
    from rfsurvey.detection.types import Trace


def amplitude_array(trace: "Trace") -> np.ndarray:
    return np.fromiter((rec.amplitude_db for rec in trace.records), dtype=np.float64, count=len(trace.records))


def compute_extrema(trace: "Trace") -> Tuple[float, float]:
    """Return (noise floor, peak) amplitude; ties resolve to the lowest frequency."""
    if not trace.records:
        raise DegenerateTraceError("trace has no records")
    amps = amplitude_array(trace)
    # argmin/argmax return the first occurrence on ties
    min_idx = int(np.argmin(amps))
    max_idx = int(np.argmax(amps))
    return float(amps[min_idx]), float(amps[max_idx])
