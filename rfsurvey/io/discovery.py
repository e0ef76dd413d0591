"""Results directory discovery: points, analyzer snapshots, and Wi-Fi lists."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Tuple, Union

from rfsurvey.detection.errors import SweepFormatError
from rfsurvey.detection.types import Point, Site
from rfsurvey.io.sweep_csv import load_snapshot
from rfsurvey.io.wifi import load_access_points
from rfsurvey.util.logging import get_logger

logger = get_logger(__name__)

SNAPSHOT_RE = re.compile(r"^\w{3}\d{4}\.csv$")
WIFI_MARKER = "Access Points"


def _point_sort_key(name: str) -> Tuple[int, int, str]:
    try:
        return (0, int(name), name)
    except ValueError:
        return (1, 0, name)


def load_point(point_dir: Path) -> Point:
    point = Point(ref=point_dir.name)
    entries = sorted(entry for entry in point_dir.iterdir() if entry.is_file())
    for entry in entries:
        if SNAPSHOT_RE.match(entry.name):
            try:
                point.snapshots.append(load_snapshot(entry))
            except (SweepFormatError, OSError) as exc:
                logger.warning(
                    "Point %s: skipping snapshot %s: %s",
                    point.ref,
                    entry.name,
                    exc,
                    extra={"point": point.ref, "snapshot": entry.name, "error_type": type(exc).__name__},
                )
        elif WIFI_MARKER in entry.name:
            try:
                point.networks.extend(load_access_points(entry, point.ref))
            except OSError as exc:
                logger.warning(
                    "Point %s: skipping access point list %s: %s",
                    point.ref,
                    entry.name,
                    exc,
                    extra={"point": point.ref, "error_type": type(exc).__name__},
                )
    if not point.snapshots:
        logger.warning("Folder for point %s contains no valid snapshots", point.ref, extra={"point": point.ref})
    return point


def load_site(results_dir: Union[str, Path], site_ref: str = "Site") -> Site:
    root = Path(results_dir).expanduser()
    if not root.is_dir():
        raise FileNotFoundError(f"results directory not found: {root}")
    names = sorted((entry.name for entry in root.iterdir() if entry.is_dir()), key=_point_sort_key)
    logger.info("%d points found in %s", len(names), root)
    site = Site(ref=site_ref)
    for name in names:
        site.points.append(load_point(root / name))
    return site
