"""Detection thresholds with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value in (None, ""):
        return default
    try:
        return float(value)
    except Exception:
        return default


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value in (None, ""):
        return default
    try:
        return max(1, int(float(value)))
    except Exception:
        return default


@dataclass
class DetectionConfig:
    """Numeric knobs for the LTE and GSM detectors."""

    lte_focus_factor: float = 0.9
    lte_min_mean_separation_db: float = 3.0
    lte_min_record_separation_db: float = 2.0
    lte_min_occupancy: float = 0.8
    gsm_channel_width_mhz: float = 0.2
    gsm_smear_factor: int = 10
    gsm_min_separation_db: float = 6.0

    @classmethod
    def from_env(cls) -> "DetectionConfig":
        return cls(
            lte_focus_factor=_float_env("RFSURVEY_LTE_FOCUS_FACTOR", 0.9),
            lte_min_mean_separation_db=_float_env("RFSURVEY_LTE_MEAN_SEPARATION_DB", 3.0),
            lte_min_record_separation_db=_float_env("RFSURVEY_LTE_RECORD_SEPARATION_DB", 2.0),
            lte_min_occupancy=_float_env("RFSURVEY_LTE_MIN_OCCUPANCY", 0.8),
            gsm_channel_width_mhz=_float_env("RFSURVEY_GSM_CHANNEL_WIDTH_MHZ", 0.2),
            gsm_smear_factor=_int_env("RFSURVEY_GSM_SMEAR_FACTOR", 10),
            gsm_min_separation_db=_float_env("RFSURVEY_GSM_MIN_SEPARATION_DB", 6.0),
        )
