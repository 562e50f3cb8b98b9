"""Fuzz pedal emulation: DSP core, factory presets and a stereo processor."""

__version__ = "1.0.0"
__all__ = ["dsp", "presets", "processor"]