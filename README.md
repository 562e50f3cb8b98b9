# woolyfuzz

A sample-by-sample model of a two-transistor fuzz pedal. The signal passes
through an input overdrive, DC blocking, AC coupling capacitors, a first
gain stage, a bass roll-off control, a bias-starved gating stage, a passive
tone control, an anti-aliasing filter and a soft limiter. Battery supply sag
is modelled too. The package also has a set of factory presets and a
stereo processor that holds parameters, selects programs and saves and
restores its state.

It needs nothing beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The DSP core

`woolyfuzz.dsp.WoolyMammothDSP` processes one channel, one sample at a time:

```python
from woolyfuzz.dsp import WoolyMammothDSP

fuzz = WoolyMammothDSP()
fuzz.set_sample_rate(48000.0)
fuzz.set_wool(0.6)    # bass roll-off ahead of the fuzz stage (50 Hz .. 350 Hz)
fuzz.set_pinch(0.4)   # bias starvation of the fuzz transistor: more means more gating
fuzz.set_eq(0.3)      # post-fuzz tone: 0.0 darker, 1.0 brighter
fuzz.set_output(0.7)  # output gain, 0.0..1.0 maps to 0.2..3.2

out = [fuzz.process(x) for x in samples]
```

Every control takes a value from 0.0 to 1.0; values outside that range are
clamped. The current settings can be read back from the `sample_rate`,
`wool`, `pinch`, `eq` and `output` properties.

`set_sample_rate()` redesigns the filters and clears all state. `reset()`
clears the circuit state (filters, coupling capacitors, supply sag, gating)
but keeps the controls and the filter design. The default sample rate is
44100 Hz.

The intermodulation memory of the fuzz stage is shared by all
`WoolyMammothDSP` instances, so channels running side by side feed one
another slightly.

## Presets

```python
from woolyfuzz.presets import factory_presets

for preset in factory_presets():
    print(preset.name, preset.wool, preset.pinch, preset.eq, preset.output)
    print("   ", preset.description)
```

`factory_presets()` returns a fresh list of nine frozen `Preset` dataclasses,
in program order, starting with "Classic Wooly" and ending with
"Midnight Mass".

## The processor

`woolyfuzz.processor.WoolyMammothProcessor` runs one `WoolyMammothDSP` per
stereo channel. It holds the float parameters `wool`, `pinch`, `eq` and
`output` and the bool parameter `bypass`. On creation it loads the first
factory preset.

```python
from woolyfuzz.processor import WoolyMammothProcessor

proc = WoolyMammothProcessor()
proc.prepare_to_play(44100.0, 512)

proc.set_current_program(1)                  # load "Velcro Rip"
print(proc.program_name(proc.current_program()))
print(proc.num_programs())                   # 9

proc.set_parameter("eq", 0.8)
left_out, right_out = proc.process_block([left, right])

saved = proc.get_state()
other = WoolyMammothProcessor()
other.set_state(saved)
```

- `process_block(buffer)` takes one sequence of samples per channel (at
  most two; more raises `ValueError`) and returns a new list of processed
  channels. Samples are held at single precision. When `bypass` is set the
  input comes back unchanged.
- `get_parameter(name)` returns a float for the four controls and a bool
  for `bypass`. `set_parameter(name, value)` clamps floats to 0..1; for
  `bypass`, any value of 0.5 or more turns it on. Unknown names raise
  `KeyError`.
- `set_current_program(index)` loads a preset's four control values;
  indices out of range are ignored. `program_name(index)` returns
  `"Unknown"` for an index out of range.
- `get_state()` returns bytes: an eight-byte header followed by an XML
  document with every parameter and the current program.
  `set_state(data)` restores it; data it cannot read, or XML of another
  kind, is ignored.

The processor also has the class attributes `name` (`"Brasscaster"`) and
`tail_length_seconds` (`0.0`).

## What it does not do

This is a library only. It has no command line, no graphical interface,
no audio device input or output and no reading or writing of audio files;
samples go in and come out as Python floats.