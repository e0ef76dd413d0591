"""LTE detection at known carrier center frequencies."""

from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from rfsurvey.detection.config import DetectionConfig
from rfsurvey.detection.types import BandClass, DetectedSignal, SignalType
from rfsurvey.dsp.spectrum import WorkingSpectrum, suppress_window
from rfsurvey.util.event_log import EventLog
from rfsurvey.util.logging import get_logger

logger = get_logger(__name__)


def detect_lte(
    spectrum: WorkingSpectrum,
    band_class: BandClass,
    noisefloor: float,
    config: Optional[DetectionConfig] = None,
    *,
    event_log: Optional[EventLog] = None,
) -> List[DetectedSignal]:
    """Confirm or reject each reference center of band_class against the spectrum.

    Confirmed channels are flattened to noisefloor in spectrum.amps_db so that a
    later, narrower band class cannot report the same energy again. noisefloor
    stays fixed for the whole trace; suppressed regions read back as noise.
    """
    cfg = config or DetectionConfig()
    step_hz = spectrum.step_hz
    bandwidth_in_steps = band_class.bandwidth_mhz * 1e6 / step_hz
    half_steps = math.floor(bandwidth_in_steps / 2.0)
    eval_half = half_steps * cfg.lte_focus_factor
    suppress_half = math.ceil(bandwidth_in_steps / 2.0)
    found: List[DetectedSignal] = []

    for center_mhz in band_class.center_frequencies_mhz:
        target_hz = center_mhz * 1e6
        if not spectrum.covers(target_hz):
            continue
        center_idx = spectrum.nearest_index(target_hz)
        if center_idx is None:
            continue

        start_idx = math.floor(center_idx - eval_half)
        end_idx = math.floor(center_idx + eval_half)
        window = spectrum.window(start_idx, end_idx)
        if window.size == 0:
            continue
        separation_db = float(np.mean(window)) - noisefloor
        if separation_db <= cfg.lte_min_mean_separation_db:
            continue

        occupied = int(np.count_nonzero((window - noisefloor) > cfg.lte_min_record_separation_db))
        if occupied <= cfg.lte_min_occupancy * bandwidth_in_steps:
            logger.debug(
                "LTE %s %.1f MHz rejected: %d/%.1f bins occupied",
                band_class.carrier,
                center_mhz,
                occupied,
                bandwidth_in_steps,
            )
            continue

        signal = DetectedSignal(
            type=SignalType.LTE,
            carrier=band_class.carrier,
            frequency_mhz=float(center_mhz),
            bandwidth_mhz=float(band_class.bandwidth_mhz),
        )
        found.append(signal)
        suppress_window(
            spectrum.amps_db,
            center_idx - suppress_half,
            center_idx + suppress_half + 1,
            noisefloor,
        )
        if event_log is not None:
            event_log.log(
                "lte_detect",
                carrier=band_class.carrier,
                center_mhz=float(center_mhz),
                bandwidth_mhz=float(band_class.bandwidth_mhz),
                separation_db=separation_db,
                occupied_bins=occupied,
            )
    return found
