"""Sample-by-sample model of a two-transistor gated fuzz circuit."""

from __future__ import annotations

import math

_NOMINAL_SUPPLY_VOLTAGE = 9.0
_MINIMUM_SUPPLY_VOLTAGE = 6.0
_BATTERY_INTERNAL_RESISTANCE = 2.5


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, with halves going away from zero."""
    if value >= 0.0:
        return float(math.floor(value + 0.5))
    return -float(math.floor(-value + 0.5))


class _CouplingCapacitor:
    """One-pole AC coupling: passes the input minus its slow-moving average."""

    def __init__(self, time_constant: float) -> None:
        self.time_constant = time_constant
        self.voltage = 0.0

    def __call__(self, sample: float) -> float:
        self.voltage = self.voltage * self.time_constant + sample * (1.0 - self.time_constant)
        return sample - self.voltage


class WoolyMammothDSP:
    """Fuzz circuit emulation with WOOL, PINCH, EQ and OUTPUT controls.

    All controls take values in the range 0..1 and are clamped to it.
    """

    # Intermodulation memory is shared by every instance, so all channels
    # of a processor feed the same delay line.
    _im_delay = 0.0

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._wool = 0.5
        self._pinch = 0.5
        self._eq = 0.5
        self._output = 0.5

        self._q2_bias_level = 0.5
        self._output_gain = 1.0
        self._wool_cutoff = 200.0
        self._eq_cutoff = 2000.0

        self._aa_b0 = 1.0
        self._aa_b1 = 0.0
        self._aa_b2 = 0.0
        self._aa_a1 = 0.0
        self._aa_a2 = 0.0

        self._c1 = _CouplingCapacitor(0.999)
        self._c2 = _CouplingCapacitor(0.995)
        self._c6 = _CouplingCapacitor(0.995)

        self._q1_bias = 0.5
        self._wool_z1 = 0.0
        self._eq_z1 = 0.0
        self._eq_z2 = 0.0
        self._dc_in = 0.0
        self._dc_out = 0.0
        self._aa_x1 = 0.0
        self._aa_x2 = 0.0
        self._aa_y1 = 0.0
        self._aa_y2 = 0.0
        self._supply_sag = 0.0
        self._average_current = 0.0
        self._gating_smoother = 1.0

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def wool(self) -> float:
        return self._wool

    @property
    def pinch(self) -> float:
        return self._pinch

    @property
    def eq(self) -> float:
        return self._eq

    @property
    def output(self) -> float:
        return self._output

    def set_sample_rate(self, sample_rate: float) -> None:
        """Set the sample rate, redesign the filters and clear all state."""
        self._sample_rate = float(sample_rate)
        self._design_anti_aliasing_filter()
        self._update_filter_cutoffs()
        self.reset()

    def reset(self) -> None:
        """Clear the circuit state; controls and filter designs are kept."""
        for capacitor in (self._c1, self._c2, self._c6):
            capacitor.voltage = 0.0
        self._q1_bias = 0.5
        self._wool_z1 = 0.0
        self._eq_z1 = self._eq_z2 = 0.0
        self._dc_in = self._dc_out = 0.0
        self._aa_x1 = self._aa_x2 = 0.0
        self._aa_y1 = self._aa_y2 = 0.0
        self._supply_sag = 0.0
        self._average_current = 0.0
        self._gating_smoother = 1.0

    def set_wool(self, value: float) -> None:
        """Bass roll-off ahead of the fuzz stage."""
        self._wool = _clamp(value, 0.0, 1.0)
        self._update_filter_cutoffs()

    def set_pinch(self, value: float) -> None:
        """Bias starvation of the fuzz transistor; higher means more gating."""
        self._pinch = _clamp(value, 0.0, 1.0)
        self._q2_bias_level = 0.15 + (1.0 - self._pinch) * 0.65

    def set_eq(self, value: float) -> None:
        """Post-fuzz tone: low is darker, high is brighter."""
        self._eq = _clamp(value, 0.0, 1.0)
        self._update_filter_cutoffs()

    def set_output(self, value: float) -> None:
        """Output level, mapping 0..1 to a gain of 0.2..3.2."""
        self._output = _clamp(value, 0.0, 1.0)
        self._output_gain = 0.2 + self._output * 3.0

    def process(self, sample: float) -> float:
        """Run one sample through the whole circuit and return the result."""
        overdriven = self._input_overdrive(sample)
        dc_blocked = self._dc_blocking_filter(overdriven)

        instantaneous_current = abs(dc_blocked) * 0.02
        self._average_current = self._average_current * 0.999 + instantaneous_current * 0.001
        supply_voltage = self._supply_voltage(self._average_current + instantaneous_current * 0.1)

        q1_out = self._transistor_q1(self._c1(dc_blocked), supply_voltage)
        wool_filtered = self._wool_bass_filter(q1_out)
        inter_stage = wool_filtered * 1.3
        q2_out = self._transistor_q2(self._c2(inter_stage), supply_voltage)
        eq_shaped = self._eq_tone_control(self._c6(q2_out))
        anti_aliased = self._anti_aliasing_filter(eq_shaped)

        supply_gain = supply_voltage / _NOMINAL_SUPPLY_VOLTAGE
        return self._soft_limit(anti_aliased * self._output_gain * supply_gain)

    # -- stages ---------------------------------------------------------

    @staticmethod
    def _input_overdrive(sample: float) -> float:
        boosted = sample * 3.5
        if boosted > 0.0:
            clipped = 0.9 * math.tanh(boosted * 1.5)
        else:
            clipped = 0.8 * math.tanh(boosted * 1.8)
        clipped += clipped * clipped * 0.15
        return math.tanh(clipped * 1.2) * 0.85

    @staticmethod
    def _soft_limit(sample: float) -> float:
        compressed = sample / (1.0 + abs(sample) * 0.5)
        if compressed > 0.0:
            limited = 0.9 * math.tanh(compressed * 1.8)
        else:
            limited = 0.85 * math.tanh(compressed * 2.0)
        return limited + limited * limited * 0.04

    def _design_anti_aliasing_filter(self) -> None:
        cutoff = self._sample_rate * 0.4
        omega = 2.0 * math.pi * cutoff / self._sample_rate
        cos_omega = math.cos(omega)
        alpha = math.sin(omega) / (2.0 * 0.707)
        a0 = 1.0 + alpha
        self._aa_b0 = (1.0 - cos_omega) / 2.0 / a0
        self._aa_b1 = (1.0 - cos_omega) / a0
        self._aa_b2 = (1.0 - cos_omega) / 2.0 / a0
        self._aa_a1 = -2.0 * cos_omega / a0
        self._aa_a2 = (1.0 - alpha) / a0

    def _anti_aliasing_filter(self, sample: float) -> float:
        result = (
            self._aa_b0 * sample
            + self._aa_b1 * self._aa_x1
            + self._aa_b2 * self._aa_x2
            - self._aa_a1 * self._aa_y1
            - self._aa_a2 * self._aa_y2
        )
        self._aa_x2, self._aa_x1 = self._aa_x1, sample
        self._aa_y2, self._aa_y1 = self._aa_y1, result
        return result

    def _update_filter_cutoffs(self) -> None:
        self._wool_cutoff = 50.0 + self._wool * 300.0
        self._eq_cutoff = 800.0 + self._eq * 2200.0

    def _dc_blocking_filter(self, sample: float) -> float:
        filtered = sample - self._dc_in + 0.995 * self._dc_out
        self._dc_in = sample
        self._dc_out = filtered
        return filtered

    def _transistor_q1(self, sample: float, supply_voltage: float) -> float:
        supply_factor = supply_voltage / _NOMINAL_SUPPLY_VOLTAGE
        bias_adjustment = (1.0 - supply_factor) * 0.3
        vbe = sample + (self._q1_bias * 0.7 - bias_adjustment)

        base_gain = 18.0 * supply_factor
        thermal_factor = 1.0 + (vbe - 0.7) * 0.2
        ic_linear = vbe * base_gain * thermal_factor

        saturation_level = 0.9 * supply_factor
        compression_factor = 0.6 + (1.0 - supply_factor) * 0.2
        if abs(ic_linear) > saturation_level * 0.3:
            stage1 = saturation_level * math.tanh(ic_linear / (saturation_level * compression_factor))
            ic = stage1 / (1.0 + abs(stage1) * 0.5)
        else:
            ic = ic_linear

        asymmetry_factor = 1.2 + (1.0 - supply_factor) * 0.3
        if ic > 0.0:
            ic *= 0.9 + (1.0 - supply_factor) * 0.2
        else:
            ic *= 1.2 * asymmetry_factor
            ic = max(ic, -0.8 * supply_factor)

        harmonic_strength = 0.08 * supply_factor
        second = ic * ic * harmonic_strength
        third = ic * ic * ic * harmonic_strength * 0.3
        ic += second + third

        if abs(ic) > 0.6 * supply_factor:
            vce_sat = 0.25 + (1.0 - supply_factor) * 0.2
            sat_factor = 1.0 - (abs(ic) - 0.6 * supply_factor) * 3.0
            ic *= max(sat_factor, vce_sat)
        return ic

    def _wool_bass_filter(self, sample: float) -> float:
        alpha = 1.0 / (1.0 + (2.0 * math.pi * self._wool_cutoff / self._sample_rate))
        self._wool_z1 = self._wool_z1 * alpha + sample * (1.0 - alpha)
        return sample - self._wool_z1

    def _transistor_q2(self, sample: float, supply_voltage: float) -> float:
        supply_factor = supply_voltage / _NOMINAL_SUPPLY_VOLTAGE
        supply_bias_shift = (1.0 - supply_factor) * 0.4
        vbe = sample + (self._q2_bias_level * 0.8 - supply_bias_shift)

        effective_bias = self._q2_bias_level * supply_factor
        bias_threshold = effective_bias * 0.6
        amplitude = abs(sample)

        activity = 1.0
        if amplitude < bias_threshold:
            activity = _clamp((amplitude / bias_threshold) ** 1.5, 0.05, 1.0)
        activity *= 0.8 + supply_factor * 0.2

        self._gating_smoother = self._gating_smoother * 0.98 + activity * 0.02
        smoothed = self._gating_smoother

        base_gain = 50.0 * supply_factor
        bias_gain_factor = 0.3 + effective_bias * 2.0
        gain = base_gain * smoothed * bias_gain_factor
        gain *= 1.0 + (1.0 - effective_bias) * 0.5 * (2.0 - supply_factor)
        ic_linear = vbe * gain

        saturation_level = 0.4 * supply_factor
        compression_factor = 0.25 + (1.0 - supply_factor) * 0.2
        if ic_linear > 0.0:
            stage1 = saturation_level * math.tanh(ic_linear / (saturation_level * compression_factor))
            ic = stage1 / (1.0 + stage1 * stage1 * 2.0)
        else:
            neg_compression = compression_factor * (0.4 + supply_factor * 0.3)
            stage1 = -saturation_level * 0.6 * math.tanh(-ic_linear / (saturation_level * neg_compression))
            ic = stage1 / (1.0 + abs(stage1) * 1.5)

        ic = self._fuzz_harmonics(ic, smoothed)

        if smoothed < 0.3:
            instability_factor = 1.0 + (1.0 - supply_factor) * 0.3
            instability = 0.008 * instability_factor * math.sin(amplitude * 120.0 + effective_bias * 40.0)
            ic += instability * (0.3 - smoothed) * 0.3

        if abs(ic) > 0.3 * supply_factor:
            vce_sat = 0.2 + (1.0 - supply_factor) * 0.25
            sat_compression = 1.0 - (abs(ic) - 0.3 * supply_factor) * 3.0
            ic *= max(sat_compression, vce_sat)
        return ic

    @staticmethod
    def _fuzz_harmonics(sample: float, activity: float) -> float:
        drive = 1.8 + (1.0 - activity) * 1.0
        shaped = sample / (1.0 + abs(sample) * drive)

        strength = 0.12 + (1.0 - activity) * 0.08
        shaped += shaped * shaped * strength * 1.5
        shaped += shaped * shaped * shaped * strength

        WoolyMammothDSP._im_delay = WoolyMammothDSP._im_delay * 0.95 + shaped * 0.05
        shaped += shaped * WoolyMammothDSP._im_delay * 0.04

        if abs(shaped) < 0.12:
            shaped *= 0.7 + 0.3 * activity

        hf_freq = 30.0 + activity * 15.0
        hf_amount = 0.06 * (1.3 - activity)
        shaped += shaped * math.sin(shaped * hf_freq) * hf_amount

        bit_depth = max(32.0 + activity * 16.0, 16.0)
        return _round_half_away(shaped * bit_depth) / bit_depth

    def _eq_tone_control(self, sample: float) -> float:
        alpha = 1.0 / (1.0 + (2.0 * math.pi * self._eq_cutoff / self._sample_rate))
        self._eq_z1 = self._eq_z1 * alpha + sample * (1.0 - alpha)
        self._eq_z2 = self._eq_z2 * alpha + self._eq_z1 * (1.0 - alpha)
        bass = self._eq_z2
        treble = sample - self._eq_z1
        return bass * (1.0 - self._eq) + treble * self._eq * 0.7

    def _supply_voltage(self, current_load: float) -> float:
        voltage_drop = current_load * _BATTERY_INTERNAL_RESISTANCE
        self._supply_sag = self._supply_sag * 0.99 + voltage_drop * 0.01
        return max(_NOMINAL_SUPPLY_VOLTAGE - self._supply_sag, _MINIMUM_SUPPLY_VOLTAGE)