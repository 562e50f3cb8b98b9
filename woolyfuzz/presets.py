"""Factory presets for the fuzz circuit."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Preset:
    """A named set of control positions, each in the range 0..1."""

    name: str
    wool: float
    pinch: float
    eq: float
    output: float
    description: str


def factory_presets() -> list[Preset]:
    """Return a fresh list of the built-in presets, in program order."""
    return [
        Preset("Classic Wooly", 0.6, 0.4, 0.3, 0.7, "The authentic Wooly Mammoth sound"),
        Preset("Velcro Rip", 0.7, 0.8, 0.2, 0.6, "Extreme gated fuzz with velcro texture"),
        Preset("Bass Destroyer", 0.8, 0.6, 0.1, 0.8, "Maximum bass fuzz destruction"),
        Preset("Gated Synth", 0.4, 0.9, 0.4, 0.5, "Heavily gated synth bass tones"),
        Preset("Smooth Fuzz", 0.5, 0.2, 0.6, 0.8, "Less gated, more sustained fuzz"),
        Preset("Sputtery Gate", 0.3, 0.7, 0.2, 0.6, "Unstable gated fuzz sputter"),
        Preset("Mild Mammoth", 0.4, 0.3, 0.5, 0.7, "Tamed but still fuzzy"),
        Preset("Extreme Pinch", 0.5, 1.0, 0.3, 0.4, "Maximum bias starvation"),
        Preset("Midnight Mass", 1.0, 0.84, 0.64, 0.5, "Aggressively gated, ripping fuzz"),
    ]