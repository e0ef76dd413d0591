"""Carrier reference tables: LTE band classes, GSM sub-bands, and sweep centers."""

from __future__ import annotations

import csv
import os
from typing import Dict, FrozenSet, List, Optional, Tuple

from rfsurvey.detection.eligibility import DEFAULT_ALLOWED_CENTERS_HZ
from rfsurvey.detection.types import BandClass, GsmSubBand
from rfsurvey.util.logging import get_logger

logger = get_logger(__name__)

TELEKOM = "Telekom"
VODAFONE = "Vodafone"
TELEFONICA = "Telefonica"

# Widest classes first so a 20 MHz channel is consumed before 10/5 MHz classes see it.
DEFAULT_BAND_CLASSES: Tuple[BandClass, ...] = (
    BandClass(TELEKOM, 20, (1482, 1815, 2160, 2630)),
    BandClass(VODAFONE, 20, (1462, 1865, 2140, 2650)),
    BandClass(TELEFONICA, 20, (1845, 2120, 2670)),
    BandClass(TELEKOM, 10, (816, 950, 1830)),
    BandClass(VODAFONE, 10, (806, 940)),
    BandClass(TELEFONICA, 10, (796, 930, 2685)),
    BandClass(TELEKOM, 5, (957.5,)),
    BandClass(VODAFONE, 5, (1875.5,)),
)

DEFAULT_GSM_SUB_BANDS: Tuple[GsmSubBand, ...] = (
    GsmSubBand(TELEFONICA, 925.0, 935.0),
    GsmSubBand(VODAFONE, 935.0, 945.0),
    GsmSubBand(TELEKOM, 945.0, 960.0),
    GsmSubBand(TELEFONICA, 1835.0, 1855.0),
    GsmSubBand(VODAFONE, 1855.0, 1880.0),
    GsmSubBand(TELEKOM, 1805.0, 1835.0),
)


class CarrierBandplan:
    """Immutable reference tables handed to the detectors.

    Without a CSV the built-in German band plan is used. The CSV has a ``kind``
    column (``lte``, ``gsm`` or ``sweep``) plus ``carrier``, ``bandwidth_mhz``,
    ``center_mhz``, ``low_mhz`` and ``high_mhz`` as applicable.
    """

    def __init__(self, csv_path: Optional[str] = None):
        self.band_classes: Tuple[BandClass, ...] = DEFAULT_BAND_CLASSES
        self.gsm_sub_bands: Tuple[GsmSubBand, ...] = DEFAULT_GSM_SUB_BANDS
        self.allowed_centers_hz: FrozenSet[int] = DEFAULT_ALLOWED_CENTERS_HZ
        if csv_path:
            if not os.path.exists(csv_path):
                raise FileNotFoundError(csv_path)
            self._load_csv(csv_path)

    def _load_csv(self, path: str) -> None:
        lte: Dict[Tuple[str, float], List[float]] = {}
        gsm: List[GsmSubBand] = []
        centers: List[int] = []
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                kind = (row.get("kind") or "").strip().lower()
                carrier = (row.get("carrier") or "").strip()
                try:
                    if kind == "lte":
                        key = (carrier, float(row["bandwidth_mhz"]))
                        lte.setdefault(key, []).append(float(row["center_mhz"]))
                    elif kind == "gsm":
                        gsm.append(GsmSubBand(carrier, float(row["low_mhz"]), float(row["high_mhz"])))
                    elif kind == "sweep":
                        centers.append(int(round(float(row["center_mhz"]) * 1e6)))
                    else:
                        logger.warning("Bandplan %s line %d: unknown kind %r", path, line_no, kind)
                except (KeyError, TypeError, ValueError) as exc:
                    logger.warning("Bandplan %s line %d skipped: %s", path, line_no, exc)
        if lte:
            classes = [BandClass(carrier, bw, tuple(freqs)) for (carrier, bw), freqs in lte.items()]
            # sorted() is stable, so file order survives within one bandwidth
            self.band_classes = tuple(sorted(classes, key=lambda bc: -bc.bandwidth_mhz))
        if gsm:
            self.gsm_sub_bands = tuple(gsm)
        if centers:
            self.allowed_centers_hz = frozenset(centers)

    @property
    def carriers(self) -> List[str]:
        seen: List[str] = []
        for name in [bc.carrier for bc in self.band_classes] + [sb.carrier for sb in self.gsm_sub_bands]:
            if name not in seen:
                seen.append(name)
        return seen

    def as_dict(self) -> Dict[str, object]:
        return {
            "lte": [
                {
                    "carrier": bc.carrier,
                    "bandwidth_mhz": bc.bandwidth_mhz,
                    "center_frequencies_mhz": list(bc.center_frequencies_mhz),
                }
                for bc in self.band_classes
            ],
            "gsm": [
                {"carrier": sb.carrier, "low_mhz": sb.low_mhz, "high_mhz": sb.high_mhz}
                for sb in self.gsm_sub_bands
            ],
            "sweep_centers_hz": sorted(self.allowed_centers_hz),
        }
