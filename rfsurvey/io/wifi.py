"""Wi-Fi access point list parsing (pipe separated) and export reduction."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from rfsurvey.detection.types import AccessPoint, Site

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

EXPORT_FIELDS = ("ssid", "bssid", "strength", "channel", "width", "atpoint")


def _parse_strength(text: str) -> Optional[float]:
    match = _NUMBER_RE.search(text or "")
    return float(match.group(0)) if match else None


def parse_access_points(text: str, point_ref: str) -> List[AccessPoint]:
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if not lines:
        return []
    header = [key.strip() for key in lines[0].split("|")]
    networks: List[AccessPoint] = []
    for line in lines[1:]:
        values = [value.strip() for value in line.split("|")]
        raw: Dict[str, str] = {key: values[idx] if idx < len(values) else "" for idx, key in enumerate(header)}
        networks.append(
            AccessPoint(
                ssid=raw.get("SSID", ""),
                bssid=raw.get("BSSID", ""),
                strength_dbm=_parse_strength(raw.get("Strength", "")),
                channel=raw.get("Center Channel", ""),
                width=raw.get("Width (Range)", ""),
                point_ref=point_ref,
                raw=raw,
            )
        )
    return networks


def load_access_points(path: Path, point_ref: str) -> List[AccessPoint]:
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_access_points(text, point_ref)


def dedupe_strongest(networks: Iterable[AccessPoint]) -> List[AccessPoint]:
    """Keep the strongest sighting per (SSID, BSSID), in first-seen order."""
    best: Dict[Tuple[str, str], AccessPoint] = {}
    for net in networks:
        key = (net.ssid, net.bssid)
        current = best.get(key)
        if current is None:
            best[key] = net
            continue
        cur_strength = current.strength_dbm if current.strength_dbm is not None else float("-inf")
        new_strength = net.strength_dbm if net.strength_dbm is not None else float("-inf")
        if new_strength > cur_strength:
            best[key] = net
    return list(best.values())


def export_rows(site: Site, dedupe: bool = True) -> List[Dict[str, object]]:
    networks = [net for point in site.points for net in point.networks]
    if dedupe:
        networks = dedupe_strongest(networks)
    return [
        {
            "ssid": net.ssid,
            "bssid": net.bssid,
            "strength": net.strength_dbm,
            "channel": net.channel,
            "width": net.width,
            "atpoint": net.point_ref,
        }
        for net in networks
    ]
