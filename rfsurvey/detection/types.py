"""Dataclasses shared across parsing, detection, and reporting layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import numpy as np


class SignalType(str, Enum):
    LTE = "LTE"
    GSM = "GSM"


@dataclass
class Parameter:
    title: str
    value: Union[str, float]
    unit: str = ""


@dataclass
class Record:
    frequency_hz: int
    amplitude_db: float


@dataclass
class DetectedSignal:
    type: SignalType
    carrier: Optional[str]
    frequency_mhz: float
    bandwidth_mhz: Optional[float] = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "type": self.type.value,
            "carrier": self.carrier,
            "frequency_mhz": self.frequency_mhz,
            "bandwidth_mhz": self.bandwidth_mhz,
        }


@dataclass(frozen=True)
class BandClass:
    carrier: str
    bandwidth_mhz: float
    center_frequencies_mhz: Tuple[float, ...]


@dataclass(frozen=True)
class GsmSubBand:
    carrier: str
    low_mhz: float
    high_mhz: float

    def contains(self, frequency_mhz: float) -> bool:
        return self.low_mhz <= frequency_mhz <= self.high_mhz


@dataclass
class Trace:
    parameters: List[Parameter] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)
    min_amplitude: Optional[float] = None
    max_amplitude: Optional[float] = None
    detected_signals: List[DetectedSignal] = field(default_factory=list)
    # Post-suppression amplitudes; raw records are left untouched.
    residual: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    def parameter_map(self) -> Dict[str, Parameter]:
        mapping: Dict[str, Parameter] = {}
        for param in self.parameters:
            mapping[param.title] = param
        return mapping

    def parameter(self, title: str) -> Optional[Union[str, float]]:
        param = self.parameter_map().get(title)
        return None if param is None else param.value

    def ensure_extrema(self) -> Tuple[float, float]:
        """Compute and memoize min/max amplitude of the raw records."""
        if self.min_amplitude is None or self.max_amplitude is None:
            from rfsurvey.detection.extrema import compute_extrema

            self.min_amplitude, self.max_amplitude = compute_extrema(self)
        return self.min_amplitude, self.max_amplitude


@dataclass
class Snapshot:
    ref: str
    traces: List[Trace] = field(default_factory=list)


@dataclass
class AccessPoint:
    ssid: str
    bssid: str
    strength_dbm: Optional[float]
    channel: str
    width: str
    point_ref: str
    raw: Dict[str, str] = field(default_factory=dict)


@dataclass
class Point:
    ref: str
    snapshots: List[Snapshot] = field(default_factory=list)
    networks: List[AccessPoint] = field(default_factory=list)
    detected_signals: List[DetectedSignal] = field(default_factory=list)

    def traces(self) -> List[Trace]:
        return [trace for snapshot in self.snapshots for trace in snapshot.traces]


@dataclass
class Site:
    ref: str
    points: List[Point] = field(default_factory=list)
