"""Trace eligibility gate: only Max Hold sweeps over known band plans are analyzed."""

from __future__ import annotations

from typing import AbstractSet, Optional

from rfsurvey.detection.types import Trace

MAX_HOLD = "Max Hold"

DEFAULT_ALLOWED_CENTERS_HZ = frozenset(
    {
        806_000_000,
        939_000_000,
        1_842_500_000,
        2_140_000_000,
        2_655_000_000,
        3_500_000_000,
    }
)


def _center_frequency_hz(trace: Trace) -> Optional[float]:
    raw = trace.parameter("Center Frequency")
    if raw is None:
        return None
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def is_eligible(trace: Trace, allowed_centers_hz: AbstractSet[float] = DEFAULT_ALLOWED_CENTERS_HZ) -> bool:
    mode = trace.parameter("Trace Mode")
    if mode is None or str(mode) != MAX_HOLD:
        return False
    center_hz = _center_frequency_hz(trace)
    if center_hz is None:
        return False
    return center_hz in allowed_centers_hz
