"""Spectrum analyzer CSV export parsing.

An export holds one or more traces side by side. Each trace occupies a block
of columns whose second column is labelled with "Sweep" in the first row. The
rows above the "Frequency [Hz]" header carry ``title, value, unit`` parameter
triples; the rows below it carry ``frequency, amplitude`` records.
"""

from __future__ import annotations

import csv
import io
import math
from pathlib import Path
from typing import List, Sequence

from rfsurvey.detection.errors import SweepFormatError
from rfsurvey.detection.types import Parameter, Record, Snapshot, Trace

RECORD_HEADER = "Frequency [Hz]"
TRACE_MARKER = "Sweep"


def _cell(row: Sequence[str], idx: int) -> str:
    return row[idx].strip() if 0 <= idx < len(row) else ""


def _find_header_row(rows: List[List[str]]) -> int:
    for idx, row in enumerate(rows):
        if any(RECORD_HEADER in cell for cell in row):
            return idx
    raise SweepFormatError(f"no '{RECORD_HEADER}' header row")


def _parse_block(rows: List[List[str]], header_idx: int, start: int, ref: str) -> Trace:
    trace = Trace()
    # The row right above the record header (value count) is not a parameter.
    for row in rows[: max(header_idx - 1, 0)]:
        title = _cell(row, start)
        if not title:
            continue
        trace.parameters.append(Parameter(title, _cell(row, start + 1), _cell(row, start + 2)))

    for line_no, row in enumerate(rows[header_idx + 1 :], start=header_idx + 2):
        freq_text = _cell(row, start)
        if not freq_text:
            break
        try:
            freq_hz = float(freq_text)
            amplitude_db = float(_cell(row, start + 1))
        except ValueError:
            raise SweepFormatError(f"{ref} line {line_no}: bad record {row[start:start + 2]!r}") from None
        if not (math.isfinite(freq_hz) and math.isfinite(amplitude_db)):
            raise SweepFormatError(f"{ref} line {line_no}: non-finite record {row[start:start + 2]!r}")
        trace.records.append(Record(int(freq_hz), amplitude_db))
    return trace


def parse_sweep_csv(text: str, ref: str = "") -> Snapshot:
    rows = list(csv.reader(io.StringIO(text.strip())))
    if not rows:
        raise SweepFormatError(f"{ref}: empty export")
    block_starts = [idx - 1 for idx, cell in enumerate(rows[0]) if TRACE_MARKER in cell]
    if not block_starts:
        raise SweepFormatError(f"{ref}: no '{TRACE_MARKER}' column in first row")
    if block_starts[0] < 0:
        raise SweepFormatError(f"{ref}: '{TRACE_MARKER}' marker in first column")
    header_idx = _find_header_row(rows)
    snapshot = Snapshot(ref=ref)
    for start in block_starts:
        snapshot.traces.append(_parse_block(rows, header_idx, start, ref))
    return snapshot


def load_snapshot(path: Path) -> Snapshot:
    path = Path(path)
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse_sweep_csv(text, ref=path.name)
