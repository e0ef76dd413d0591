import pytest

from rfsurvey.detection.eligibility import is_eligible
from rfsurvey.detection.errors import DegenerateTraceError
from rfsurvey.detection.extrema import compute_extrema
from rfsurvey.detection.types import Parameter, Trace
from rfsurvey.dsp.spectrum import WorkingSpectrum, suppress_window


def test_extrema_bound_every_raw_record(make_trace, set_level) -> None:
    trace = make_trace(1795e6, 200, floor_db=-90.0)
    set_level(trace, 10, 12, -55.5)
    set_level(trace, 150, 150, -101.25)
    low, high = compute_extrema(trace)
    assert low == -101.25
    assert high == -55.5
    assert all(low <= rec.amplitude_db <= high for rec in trace.records)


def test_extrema_rejects_empty_trace() -> None:
    with pytest.raises(DegenerateTraceError):
        compute_extrema(Trace())


def test_extrema_come_from_raw_records_after_suppression(make_trace, set_level) -> None:
    trace = make_trace(1795e6, 50, floor_db=-90.0)
    set_level(trace, 5, 5, -40.0)
    assert trace.ensure_extrema() == (-90.0, -40.0)

    spectrum = WorkingSpectrum.from_trace(trace)
    suppress_window(spectrum.amps_db, 0, 49, -90.0)

    assert trace.ensure_extrema() == (-90.0, -40.0)
    assert compute_extrema(trace) == (-90.0, -40.0)


def test_gate_accepts_max_hold_on_known_center(make_trace) -> None:
    trace = make_trace(920e6, 10, center_hz=939e6)
    assert is_eligible(trace)
    assert is_eligible(trace)


def test_gate_rejects_clear_write_on_any_center(make_trace) -> None:
    for center in (806e6, 939e6, 1842.5e6, 2140e6, 2655e6, 3500e6):
        trace = make_trace(920e6, 10, center_hz=center, mode="Clear Write")
        assert not is_eligible(trace)


def test_gate_rejects_center_outside_allow_list(make_trace) -> None:
    trace = make_trace(1990e6, 10, center_hz=2_000_000_001)
    assert not is_eligible(trace)


def test_gate_uses_exact_membership_and_last_parameter_wins(make_trace) -> None:
    trace = make_trace(1830e6, 10, center_hz=1842.5e6)
    assert is_eligible(trace)
    trace.parameters.append(Parameter("Center Frequency", "1842500001", "Hz"))
    assert not is_eligible(trace)
    trace.parameters.append(Parameter("Center Frequency", "1842500000.0", "Hz"))
    assert is_eligible(trace)


def test_gate_rejects_missing_or_garbled_center() -> None:
    trace = Trace(parameters=[Parameter("Trace Mode", "Max Hold")])
    assert not is_eligible(trace)
    trace.parameters.append(Parameter("Center Frequency", "n/a"))
    assert not is_eligible(trace)


def test_gate_honours_custom_allow_list(make_trace) -> None:
    trace = make_trace(920e6, 10, center_hz=925e6)
    assert not is_eligible(trace)
    assert is_eligible(trace, frozenset({925_000_000}))
