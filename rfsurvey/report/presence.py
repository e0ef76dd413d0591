"""Per-point carrier presence tables and CSV exports."""

from __future__ import annotations

import csv
from typing import Dict, IO, Iterable, List, Sequence

from rfsurvey.detection.types import SignalType, Site
from rfsurvey.io.wifi import EXPORT_FIELDS

PresenceTable = Dict[str, Dict[str, Dict[str, bool]]]


def presence_table(site: Site, carriers: Sequence[str]) -> PresenceTable:
    """Map point ref -> carrier -> {"GSM": bool, "LTE": bool} from hoisted signals."""
    table: PresenceTable = {}
    for point in site.points:
        row = {carrier: {kind.value: False for kind in SignalType} for carrier in carriers}
        for signal in point.detected_signals:
            if signal.carrier is None:
                continue
            row.setdefault(signal.carrier, {kind.value: False for kind in SignalType})
            row[signal.carrier][signal.type.value] = True
        table[point.ref] = row
    return table


def _columns(carriers: Sequence[str]) -> List[str]:
    return [f"{carrier} {kind.value}" for carrier in carriers for kind in SignalType]


def render_presence_text(table: PresenceTable, carriers: Sequence[str]) -> str:
    columns = _columns(carriers)
    point_width = max([len("Point")] + [len(ref) for ref in table])
    widths = [max(len(col), 3) for col in columns]
    header = "  ".join(["Point".ljust(point_width)] + [col.ljust(w) for col, w in zip(columns, widths)])
    lines = [header, "-" * len(header)]
    for ref, row in table.items():
        cells = []
        for carrier in carriers:
            for kind in SignalType:
                cells.append("yes" if row.get(carrier, {}).get(kind.value) else "-")
        lines.append("  ".join([ref.ljust(point_width)] + [cell.ljust(w) for cell, w in zip(cells, widths)]))
    return "\n".join(lines)


def write_presence_csv(fh: IO[str], table: PresenceTable, carriers: Sequence[str]) -> None:
    writer = csv.writer(fh)
    writer.writerow(["point"] + _columns(carriers))
    for ref, row in table.items():
        writer.writerow(
            [ref]
            + [int(bool(row.get(carrier, {}).get(kind.value))) for carrier in carriers for kind in SignalType]
        )


def write_signals_csv(fh: IO[str], site: Site) -> None:
    writer = csv.writer(fh)
    writer.writerow(["point", "type", "carrier", "frequency_mhz", "bandwidth_mhz"])
    for point in site.points:
        for signal in point.detected_signals:
            writer.writerow(
                [
                    point.ref,
                    signal.type.value,
                    signal.carrier or "",
                    f"{signal.frequency_mhz:g}",
                    "" if signal.bandwidth_mhz is None else f"{signal.bandwidth_mhz:g}",
                ]
            )


def write_wifi_csv(fh: IO[str], rows: Iterable[Dict[str, object]]) -> None:
    writer = csv.DictWriter(fh, fieldnames=list(EXPORT_FIELDS))
    writer.writeheader()
    for row in rows:
        writer.writerow({key: "" if row.get(key) is None else row.get(key) for key in EXPORT_FIELDS})
