"""Stereo effect processor with parameters, programs and saved state."""

from __future__ import annotations

import struct
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Sequence

from woolyfuzz.dsp import WoolyMammothDSP
from woolyfuzz.presets import Preset, factory_presets

_STATE_TAG = "WoolyMammoth"
_XML_MAGIC = 0x21324356
_FLOAT_DEFAULTS = {"wool": 0.5, "pinch": 0.3, "eq": 0.5, "output": 0.5}
_BYPASS = "bypass"
_NUM_CHANNELS = 2


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class WoolyMammothProcessor:
    """Runs one fuzz circuit per stereo channel and manages its controls."""

    name = "Brasscaster"
    tail_length_seconds = 0.0

    def __init__(self) -> None:
        self._channels = [WoolyMammothDSP() for _ in range(_NUM_CHANNELS)]
        self._floats = {key: _to_float32(value) for key, value in _FLOAT_DEFAULTS.items()}
        self._bypass = False
        self._presets: list[Preset] = factory_presets()
        self._current_program = 0
        if self._presets:
            self._load_preset(0)

    # -- audio ----------------------------------------------------------

    def prepare_to_play(self, sample_rate: float, samples_per_block: int) -> None:
        """Set the sample rate on every channel and clear their state."""
        for dsp in self._channels:
            dsp.set_sample_rate(sample_rate)
            dsp.reset()

    def process_block(self, buffer: Iterable[Iterable[float]]) -> list[list[float]]:
        """Process a block given as one sequence of samples per channel.

        Returns the processed channels; when bypassed, the input unchanged.
        """
        channels = [[_to_float32(float(sample)) for sample in channel] for channel in buffer]
        if len(channels) > _NUM_CHANNELS:
            raise ValueError(f"at most {_NUM_CHANNELS} channels are supported, got {len(channels)}")
        if self._bypass:
            return channels

        for dsp in self._channels:
            dsp.set_wool(self._floats["wool"])
            dsp.set_pinch(self._floats["pinch"])
            dsp.set_eq(self._floats["eq"])
            dsp.set_output(self._floats["output"])

        return [
            [_to_float32(dsp.process(sample)) for sample in channel]
            for dsp, channel in zip(self._channels, channels)
        ]

    # -- parameters -----------------------------------------------------

    def get_parameter(self, name: str) -> float | bool:
        """Return the value of a parameter: a float in 0..1, or a bool for bypass."""
        if name == _BYPASS:
            return self._bypass
        try:
            return self._floats[name]
        except KeyError:
            raise KeyError(f"unknown parameter: {name!r}") from None

    def set_parameter(self, name: str, value: float | bool) -> None:
        """Set a parameter; float values are clamped to 0..1."""
        if name == _BYPASS:
            self._bypass = float(value) >= 0.5
            return
        if name not in self._floats:
            raise KeyError(f"unknown parameter: {name!r}")
        self._floats[name] = _to_float32(_clamp(float(value), 0.0, 1.0))

    # -- programs -------------------------------------------------------

    def num_programs(self) -> int:
        return len(self._presets)

    def current_program(self) -> int:
        return self._current_program

    def set_current_program(self, index: int) -> None:
        """Select and load a factory preset; out-of-range indices are ignored."""
        if 0 <= index < len(self._presets):
            self._current_program = index
            self._load_preset(index)

    def program_name(self, index: int) -> str:
        if 0 <= index < len(self._presets):
            return self._presets[index].name
        return "Unknown"

    def _load_preset(self, index: int) -> None:
        preset = self._presets[index]
        self.set_parameter("wool", preset.wool)
        self.set_parameter("pinch", preset.pinch)
        self.set_parameter("eq", preset.eq)
        self.set_parameter("output", preset.output)

    # -- state ----------------------------------------------------------

    def get_state(self) -> bytes:
        """Serialise parameters and the current program to a binary blob."""
        root = ET.Element(_STATE_TAG, {"currentPreset": str(self._current_program)})
        for key, value in self._floats.items():
            ET.SubElement(root, "PARAM", {"id": key, "value": repr(value)})
        ET.SubElement(root, "PARAM", {"id": _BYPASS, "value": "1.0" if self._bypass else "0.0"})
        text = ET.tostring(root, encoding="unicode").encode("utf-8")
        return struct.pack("<II", _XML_MAGIC, len(text)) + text + b"\0"

    def set_state(self, data: bytes) -> None:
        """Restore a blob from get_state; unreadable or foreign data is ignored."""
        root = self._parse_state(bytes(data))
        if root is None or root.tag != _STATE_TAG:
            return

        for param in root.iter("PARAM"):
            key = param.get("id")
            if key != _BYPASS and key not in self._floats:
                continue
            try:
                value = float(param.get("value", ""))
            except ValueError:
                continue
            self.set_parameter(key, value)

        if "currentPreset" in root.attrib:
            try:
                index = int(float(root.attrib["currentPreset"]))
            except ValueError:
                index = 0
            self._current_program = int(_clamp(index, 0, len(self._presets) - 1))

    @staticmethod
    def _parse_state(data: bytes) -> ET.Element | None:
        if len(data) > 8:
            magic, length = struct.unpack("<II", data[:8])
            if magic == _XML_MAGIC:
                data = data[8 : 8 + min(length, len(data) - 8)]
        data = data.rstrip(b"\0")
        if not data:
            return None
        try:
            return ET.fromstring(data.decode("utf-8"))
        except (ET.ParseError, UnicodeDecodeError):
            return None


def _channel_lengths(buffer: Sequence[Sequence[float]]) -> list[int]:
    return [len(channel) for channel in buffer]