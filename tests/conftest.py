"""Synthetic spectrum fixtures shared by the detection and I/O tests."""

from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pytest

from rfsurvey.detection.types import Parameter, Record, Trace


def _build_trace(
    start_hz: float,
    count: int,
    step_hz: float = 50_000.0,
    floor_db: float = -90.0,
    *,
    mode: str = "Max Hold",
    center_hz: Optional[float] = None,
    span_hz: Optional[float] = None,
) -> Trace:
    freqs = start_hz + np.arange(count, dtype=np.float64) * step_hz
    if center_hz is None:
        center_hz = start_hz + count * step_hz / 2.0
    if span_hz is None:
        span_hz = count * step_hz
    params = [
        Parameter("Trace Mode", mode, ""),
        Parameter("Center Frequency", f"{center_hz:.0f}", "Hz"),
        Parameter("Span", f"{span_hz:.0f}", "Hz"),
    ]
    records = [Record(int(round(f)), float(floor_db)) for f in freqs]
    return Trace(parameters=params, records=records)


def _set_level(trace: Trace, start_idx: int, end_idx: int, level_db: float) -> Trace:
    """Set records[start_idx..end_idx] (inclusive) to level_db."""
    for rec in trace.records[start_idx : end_idx + 1]:
        rec.amplitude_db = float(level_db)
    return trace


def _render_export(traces: Sequence[Trace]) -> str:
    """Render traces side by side in the analyzer CSV layout."""
    blocks: List[List[List[str]]] = []
    for trace in traces:
        rows = [["Type", "Sweep", ""]]
        rows += [[p.title, str(p.value), p.unit] for p in trace.parameters]
        rows.append(["Values", str(len(trace.records)), ""])
        rows.append(["Frequency [Hz]", "Amplitude [dBm]", ""])
        rows += [[str(rec.frequency_hz), f"{rec.amplitude_db:.2f}", ""] for rec in trace.records]
        blocks.append(rows)
    height = max(len(rows) for rows in blocks)
    lines = []
    for idx in range(height):
        cells: List[str] = []
        for rows in blocks:
            cells += rows[idx] if idx < len(rows) else ["", "", ""]
        lines.append(",".join(cells))
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_trace():
    return _build_trace


@pytest.fixture
def set_level():
    return _set_level


@pytest.fixture
def render_export():
    return _render_export


@pytest.fixture
def lte_gsm_trace():
    """Eligible 920-960 MHz sweep: 10 MHz LTE at 950 MHz and a GSM carrier at 930 MHz."""
    trace = _build_trace(920e6, 800, floor_db=-95.0, center_hz=939e6)
    _set_level(trace, 500, 700, -70.0)
    _set_level(trace, 200, 200, -60.0)
    return trace


@pytest.fixture
def results_dir(tmp_path: Path, render_export, lte_gsm_trace) -> Path:
    """results/ tree with two points, one analyzer export each, plus a Wi-Fi list."""
    root = tmp_path / "results"
    first = root / "1"
    second = root / "2"
    first.mkdir(parents=True)
    second.mkdir()
    clear_write = _build_trace(920e6, 800, floor_db=-95.0, center_hz=939e6, mode="Clear Write")
    (first / "Tra0001.csv").write_text(render_export([lte_gsm_trace, clear_write]), encoding="utf-8")
    quiet = _build_trace(920e6, 800, floor_db=-95.0, center_hz=939e6)
    (second / "Tra0002.csv").write_text(render_export([quiet]), encoding="utf-8")
    (first / "Access Points 1.txt").write_text(
        "SSID|BSSID|Strength|Center Channel|Width (Range)\n"
        "office|aa:bb:cc:00:00:01|-61 dBm|36|80 MHz\n"
        "office|aa:bb:cc:00:00:01|-48 dBm|36|80 MHz\n"
        "guest|aa:bb:cc:00:00:02|-70 dBm|6|20 MHz\n",
        encoding="utf-8",
    )
    return root
