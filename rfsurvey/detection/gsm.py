"""Blind GSM scan: strip the strongest peak until nothing clears the threshold."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from rfsurvey.detection.config import DetectionConfig
from rfsurvey.detection.types import DetectedSignal, GsmSubBand, SignalType
from rfsurvey.dsp.spectrum import WorkingSpectrum, suppress_window
from rfsurvey.util.event_log import EventLog
from rfsurvey.util.logging import get_logger

logger = get_logger(__name__)


def attribute_carrier(frequency_mhz: float, sub_bands: Sequence[GsmSubBand]) -> Optional[str]:
    for band in sub_bands:
        if band.contains(frequency_mhz):
            return band.carrier
    return None


def snap_to_channel(freq_hz: float, channel_hz: float) -> float:
    """Nearest channel center, halves rounding up."""
    return math.floor(freq_hz / channel_hz + 0.5) * channel_hz


def detect_gsm(
    spectrum: WorkingSpectrum,
    noisefloor: float,
    sub_bands: Sequence[GsmSubBand],
    config: Optional[DetectionConfig] = None,
    *,
    event_log: Optional[EventLog] = None,
) -> List[DetectedSignal]:
    """Iteratively pick, attribute, and blank the strongest remaining peak.

    Every pass blanks at least the selected peak bin, so the loop runs at most
    once per record.
    """
    cfg = config or DetectionConfig()
    channel_hz = cfg.gsm_channel_width_mhz * 1e6
    bandwidth_in_steps = channel_hz / spectrum.step_hz
    smear = math.floor(bandwidth_in_steps / 2.0) * cfg.gsm_smear_factor
    found: List[DetectedSignal] = []

    for _ in range(spectrum.size):
        peak_idx = spectrum.peak_index()
        peak_db = float(spectrum.amps_db[peak_idx])
        if peak_db - noisefloor < cfg.gsm_min_separation_db:
            break

        channel_freq_hz = snap_to_channel(float(spectrum.freqs_hz[peak_idx]), channel_hz)
        channel_mhz = channel_freq_hz / 1e6
        carrier = attribute_carrier(channel_mhz, sub_bands)
        if carrier is not None:
            found.append(
                DetectedSignal(
                    type=SignalType.GSM,
                    carrier=carrier,
                    frequency_mhz=channel_mhz,
                )
            )
            if event_log is not None:
                event_log.log("gsm_detect", carrier=carrier, channel_mhz=channel_mhz, peak_db=peak_db)
        else:
            logger.debug("GSM peak at %.1f MHz outside carrier sub-bands", channel_mhz)
            if event_log is not None:
                event_log.log("gsm_unattributed", channel_mhz=channel_mhz, peak_db=peak_db)

        suppress_window(spectrum.amps_db, peak_idx - smear, peak_idx + smear, noisefloor)
    return found
