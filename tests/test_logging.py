import json
import logging

import pytest

from rfsurvey.detection.engine import DetectionEngine
from rfsurvey.detection.types import Point, Snapshot
from rfsurvey.io.discovery import load_point
from rfsurvey.util.logging import ConsoleFormatter, configure_logging


@pytest.fixture
def json_log(tmp_path):
    path = tmp_path / "rfsurvey.jsonl"
    configure_logging(level="WARNING", json_file=str(path), use_color=False)
    yield path
    for handler in logging.getLogger("rfsurvey").handlers:
        handler.close()
    configure_logging()


def _records(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


def test_trace_warning_carries_survey_location(json_log, make_trace) -> None:
    broken = make_trace(920e6, 800, floor_db=-95.0, center_hz=939e6)
    broken.parameters = [p for p in broken.parameters if p.title != "Span"]
    point = Point("7", snapshots=[Snapshot("Tra0007.csv", [broken])])

    DetectionEngine().process_point(point)

    warnings = [rec for rec in _records(json_log) if rec["level"] == "WARNING"]
    assert len(warnings) == 1
    assert warnings[0]["point"] == "7"
    assert warnings[0]["snapshot"] == "Tra0007.csv"
    assert warnings[0]["trace_index"] == 0
    assert warnings[0]["error_type"] == "MissingParameterError"


def test_bad_snapshot_warning_names_the_file(json_log, tmp_path) -> None:
    point_dir = tmp_path / "results" / "4"
    point_dir.mkdir(parents=True)
    (point_dir / "Tra0004.csv").write_text("no markers here\n", encoding="utf-8")

    point = load_point(point_dir)

    assert point.snapshots == []
    records = _records(json_log)
    skipped = [rec for rec in records if rec.get("snapshot") == "Tra0004.csv"]
    assert skipped[0]["point"] == "4"
    assert skipped[0]["error_type"] == "SweepFormatError"
    assert any(rec["message"].startswith("Folder for point 4") and rec["point"] == "4" for rec in records)


def test_console_line_appends_context() -> None:
    record = logging.LogRecord("rfsurvey.detection.engine", logging.WARNING, __file__, 1, "Skipping trace", None, None)
    record.point = "3"
    record.trace_index = 1

    line = ConsoleFormatter(use_color=False).format(record)

    assert "[detection.engine] Skipping trace (point=3 trace_index=1)" in line
