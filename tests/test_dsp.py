import math

import pytest

from woolyfuzz.dsp import WoolyMammothDSP


def _sine(frequency, amplitude, count, sample_rate=44100.0):
    return [amplitude * math.sin(2.0 * math.pi * frequency * n / sample_rate) for n in range(count)]


def _prepared(sample_rate=44100.0):
    dsp = WoolyMammothDSP()
    dsp.set_sample_rate(sample_rate)
    return dsp


def test_default_controls():
    dsp = WoolyMammothDSP()
    assert dsp.sample_rate == 44100.0
    assert dsp.wool == 0.5
    assert dsp.pinch == 0.5
    assert dsp.eq == 0.5
    assert dsp.output == 0.5


def test_set_sample_rate_is_stored():
    dsp = WoolyMammothDSP()
    dsp.set_sample_rate(48000)
    assert dsp.sample_rate == 48000.0


@pytest.mark.parametrize("setter,getter", [
    ("set_wool", "wool"),
    ("set_pinch", "pinch"),
    ("set_eq", "eq"),
    ("set_output", "output"),
])
def test_controls_are_clamped(setter, getter):
    dsp = WoolyMammothDSP()
    getattr(dsp, setter)(-3.0)
    assert getattr(dsp, getter) == 0.0
    getattr(dsp, setter)(7.5)
    assert getattr(dsp, getter) == 1.0
    getattr(dsp, setter)(0.25)
    assert getattr(dsp, getter) == 0.25


@pytest.mark.parametrize("amplitude", [0.01, 0.3, 1.0, 10.0, 100.0])
def test_output_stays_within_limiter_range(amplitude):
    dsp = _prepared()
    dsp.set_output(1.0)
    outputs = [dsp.process(x) for x in _sine(220.0, amplitude, 2000)]
    assert all(math.isfinite(y) for y in outputs)
    assert max(abs(y) for y in outputs) < 1.0


@pytest.mark.parametrize("settings", [
    (0.6, 0.4, 0.3, 0.7),
    (0.7, 0.8, 0.2, 0.6),
    (0.5, 1.0, 0.3, 0.4),
    (1.0, 0.84, 0.64, 0.5),
    (0.0, 0.0, 0.0, 0.0),
])
def test_outputs_bounded_across_settings(settings):
    wool, pinch, eq, output = settings
    dsp = _prepared()
    dsp.set_wool(wool)
    dsp.set_pinch(pinch)
    dsp.set_eq(eq)
    dsp.set_output(output)
    outputs = [dsp.process(x) for x in _sine(110.0, 0.5, 1500)]
    assert len(outputs) == 1500
    assert all(math.isfinite(y) for y in outputs)
    assert max(abs(y) for y in outputs) < 1.0


def test_signal_produces_audible_output():
    dsp = _prepared()
    outputs = [dsp.process(x) for x in _sine(440.0, 0.5, 4000)]
    assert max(abs(y) for y in outputs[1000:]) > 1e-3


def test_higher_output_control_gives_louder_peak():
    quiet = _prepared()
    loud = _prepared()
    quiet.set_output(0.0)
    loud.set_output(1.0)
    signal = _sine(330.0, 0.5, 4000)
    quiet_peak = max(abs(quiet.process(x)) for x in signal)
    loud_peak = max(abs(loud.process(x)) for x in signal)
    assert loud_peak > quiet_peak


def test_process_works_without_sample_rate_setup():
    dsp = WoolyMammothDSP()
    outputs = [dsp.process(x) for x in _sine(440.0, 0.5, 500)]
    assert all(math.isfinite(y) and abs(y) < 1.0 for y in outputs)


def test_reset_keeps_controls():
    dsp = _prepared()
    dsp.set_wool(0.9)
    dsp.set_pinch(0.1)
    for x in _sine(100.0, 1.0, 200):
        dsp.process(x)
    dsp.reset()
    assert dsp.wool == 0.9
    assert dsp.pinch == 0.1
    assert dsp.sample_rate == 44100.0


def test_reset_output_remains_bounded():
    dsp = _prepared()
    for x in _sine(100.0, 50.0, 500):
        dsp.process(x)
    dsp.reset()
    outputs = [dsp.process(x) for x in _sine(100.0, 0.2, 500)]
    assert all(abs(y) < 1.0 for y in outputs)