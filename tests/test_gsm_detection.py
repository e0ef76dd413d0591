import numpy as np

import rfsurvey.detection.gsm as gsm_module
from rfsurvey.detection.gsm import attribute_carrier, detect_gsm, snap_to_channel
from rfsurvey.detection.types import DetectedSignal, GsmSubBand, SignalType
from rfsurvey.dsp.spectrum import WorkingSpectrum
from rfsurvey.io.bandplan import DEFAULT_GSM_SUB_BANDS


def test_attribution_matches_carrier_sub_bands() -> None:
    assert attribute_carrier(930.0, DEFAULT_GSM_SUB_BANDS) == "Telefonica"
    assert attribute_carrier(940.0, DEFAULT_GSM_SUB_BANDS) == "Vodafone"
    assert attribute_carrier(950.0, DEFAULT_GSM_SUB_BANDS) == "Telekom"
    assert attribute_carrier(1820.0, DEFAULT_GSM_SUB_BANDS) == "Telekom"
    assert attribute_carrier(1845.0, DEFAULT_GSM_SUB_BANDS) == "Telefonica"
    assert attribute_carrier(1870.0, DEFAULT_GSM_SUB_BANDS) == "Vodafone"


def test_attribution_outside_sub_bands_is_none() -> None:
    assert attribute_carrier(915.0, DEFAULT_GSM_SUB_BANDS) is None
    assert attribute_carrier(1890.0, DEFAULT_GSM_SUB_BANDS) is None
    assert attribute_carrier(930.0, ()) is None


def test_attribution_uses_substituted_table() -> None:
    table = (GsmSubBand("Railway", 921.0, 925.0),)
    assert attribute_carrier(923.4, table) == "Railway"
    assert attribute_carrier(930.0, table) is None


def test_channel_snap_rounds_halves_up() -> None:
    assert snap_to_channel(930_040_000, 200_000) == 930_000_000
    assert snap_to_channel(930_100_000, 200_000) == 930_200_000
    assert snap_to_channel(930_160_000, 200_000) == 930_200_000


def test_two_carriers_are_found_in_strength_order(make_trace, set_level) -> None:
    trace = make_trace(920e6, 800, floor_db=-95.0)
    set_level(trace, 200, 200, -70.0)  # 930.0 MHz
    set_level(trace, 600, 600, -80.0)  # 950.0 MHz
    spectrum = WorkingSpectrum.from_trace(trace)

    found = detect_gsm(spectrum, -95.0, DEFAULT_GSM_SUB_BANDS)

    assert found == [
        DetectedSignal(SignalType.GSM, "Telefonica", 930.0),
        DetectedSignal(SignalType.GSM, "Telekom", 950.0),
    ]
    assert float(spectrum.amps_db.max()) == -95.0
    assert trace.records[200].amplitude_db == -70.0


def test_peak_is_snapped_to_channel_grid(make_trace, set_level) -> None:
    trace = make_trace(920e6, 800, floor_db=-95.0)
    set_level(trace, 603, 603, -70.0)  # 950.15 MHz
    spectrum = WorkingSpectrum.from_trace(trace)

    found = detect_gsm(spectrum, -95.0, DEFAULT_GSM_SUB_BANDS)

    assert [sig.frequency_mhz for sig in found] == [950.2]
    assert found[0].bandwidth_mhz is None


def test_unattributed_peak_is_suppressed_without_signal(make_trace, set_level) -> None:
    trace = make_trace(900e6, 800, floor_db=-95.0)
    set_level(trace, 300, 300, -70.0)  # 915.0 MHz, below the carrier sub-bands
    spectrum = WorkingSpectrum.from_trace(trace)

    found = detect_gsm(spectrum, -95.0, DEFAULT_GSM_SUB_BANDS)

    assert found == []
    assert float(spectrum.amps_db.max()) == -95.0


def test_peak_below_min_separation_is_left_alone(make_trace, set_level) -> None:
    trace = make_trace(920e6, 800, floor_db=-95.0)
    set_level(trace, 200, 200, -89.5)
    spectrum = WorkingSpectrum.from_trace(trace)

    assert detect_gsm(spectrum, -95.0, DEFAULT_GSM_SUB_BANDS) == []
    assert spectrum.amps_db[200] == -89.5


def test_smear_blanks_sidelobes_around_peak(make_trace, set_level) -> None:
    trace = make_trace(920e6, 800, floor_db=-95.0)
    set_level(trace, 190, 210, -80.0)
    set_level(trace, 200, 200, -60.0)
    spectrum = WorkingSpectrum.from_trace(trace)

    found = detect_gsm(spectrum, -95.0, DEFAULT_GSM_SUB_BANDS)

    # 0.2 MHz / 50 kHz = 4 bins, half 2, smeared x10: bins 180..220
    assert len(found) == 1
    assert np.all(spectrum.amps_db[180:221] == -95.0)


def test_loop_is_bounded_by_record_count(make_trace, monkeypatch) -> None:
    rng = np.random.default_rng(7)
    # 400 kHz bins: the channel half-width floors to zero, so only the peak bin is blanked
    trace = make_trace(925e6, 60, step_hz=400_000.0, floor_db=-95.0)
    for rec, level in zip(trace.records, rng.uniform(-95.0, -40.0, size=60)):
        rec.amplitude_db = float(level)
    noisefloor, _ = trace.ensure_extrema()
    spectrum = WorkingSpectrum.from_trace(trace)

    calls = []
    original = gsm_module.suppress_window

    def counting(amps, start, end, level):
        calls.append((start, end))
        return original(amps, start, end, level)

    monkeypatch.setattr(gsm_module, "suppress_window", counting)
    found = detect_gsm(spectrum, noisefloor, DEFAULT_GSM_SUB_BANDS)

    assert 0 < len(calls) <= len(trace.records)
    assert all(start == end for start, end in calls)
    assert len(found) <= len(calls)
    assert float(spectrum.amps_db.max()) - noisefloor < 6.0
