import dataclasses

import pytest

from woolyfuzz.presets import Preset, factory_presets


def test_preset_count_and_order():
    presets = factory_presets()
    assert len(presets) == 9
    assert presets[0].name == "Classic Wooly"
    assert presets[-1].name == "Midnight Mass"


def test_midnight_mass_values():
    preset = factory_presets()[-1]
    assert (preset.wool, preset.pinch, preset.eq, preset.output) == (1.0, 0.84, 0.64, 0.5)
    assert preset.description == "Aggressively gated, ripping fuzz"


def test_all_controls_in_unit_range():
    for preset in factory_presets():
        for value in (preset.wool, preset.pinch, preset.eq, preset.output):
            assert 0.0 <= value <= 1.0


def test_names_are_unique():
    names = [preset.name for preset in factory_presets()]
    assert len(set(names)) == len(names)


def test_presets_are_immutable():
    preset = factory_presets()[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        preset.wool = 0.1  # type: ignore[misc]
    assert preset.wool == 0.6


def test_each_call_returns_fresh_list():
    first = factory_presets()
    first.clear()
    assert len(factory_presets()) > 0


def test_equality_by_value():
    preset = factory_presets()[1]
    copy = Preset(preset.name, preset.wool, preset.pinch, preset.eq, preset.output, preset.description)
    assert copy == preset