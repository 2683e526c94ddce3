"""Tests for the LIF stepper and its input generators."""

import math

import numpy as np
import pytest

from neurolabs.simulation.lif import ForceVectors, LifParams, StepResult, step_lif
from neurolabs.simulation.stimulus import (
    InputMode, NoiseConfig, PulseConfig, SineConfig,
    default_rng, input_current, stimulus_protocol,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class FixedNormal:
    """Deterministic stand-in for a random source."""

    def __init__(self, value):
        self.value = value

    def standard_normal(self):
        return self.value


@pytest.fixture
def params():
    """Default lab neuron: tau_m = 10 ms, E_L = -70, thresh = -50, reset = -80."""
    return LifParams()


def run_steps(params, n_steps, v0=None, rng=None):
    v = params.E_L if v0 is None else v0
    t = 0.0
    results = []
    for _ in range(n_steps):
        r = step_lif(v, t, params, rng)
        v, t = r.voltage, r.time
        results.append(r)
    return results


# ---------------------------------------------------------------------------
# Input generators
# ---------------------------------------------------------------------------

class TestInputCurrent:

    def test_constant(self, params):
        p = LifParams(I=2.5)
        assert input_current(p, 123.4) == 2.5

    @pytest.mark.parametrize("time,expected", [
        (0.0, 15.0), (4.9, 15.0), (5.0, 0.0), (49.9, 0.0),
        (50.0, 15.0), (52.0, 15.0), (60.0, 0.0),
    ])
    def test_pulse_train(self, time, expected):
        p = LifParams(input_mode=InputMode.PULSE,
                      pulse_config=PulseConfig(interval=50.0, width=5.0, amplitude=15.0))
        assert input_current(p, time) == expected

    def test_sine(self):
        p = LifParams(input_mode="sine",
                      sine_config=SineConfig(frequency=5.0, amplitude=10.0))
        assert input_current(p, 0.0) == pytest.approx(0.0)
        # 50 ms is a quarter period at 5 Hz.
        assert input_current(p, 50.0) == pytest.approx(10.0)
        assert input_current(p, 150.0) == pytest.approx(-10.0)

    def test_noise_uses_injected_source(self):
        p = LifParams(input_mode=InputMode.NOISE,
                      noise_config=NoiseConfig(mean=2.0, sigma=5.0))
        assert input_current(p, 0.0, FixedNormal(1.5)) == pytest.approx(9.5)

    def test_noise_defaults_to_shared_source(self):
        p = LifParams(input_mode=InputMode.NOISE,
                      noise_config=NoiseConfig(mean=2.0, sigma=5.0))
        default_rng().seed(11)
        first = input_current(p, 0.0)
        default_rng().seed(11)
        assert input_current(p, 0.0) == first
        assert first == pytest.approx(2.0 + 5.0 * np.random.RandomState(11).standard_normal())

    def test_noise_statistics(self):
        p = LifParams(input_mode=InputMode.NOISE,
                      noise_config=NoiseConfig(mean=2.0, sigma=5.0))
        rng = np.random.RandomState(0)
        draws = np.array([input_current(p, 0.0, rng) for _ in range(5000)])
        assert abs(draws.mean() - 2.0) < 0.3
        assert abs(draws.std() - 5.0) < 0.3

    def test_mode_from_string(self):
        assert LifParams(input_mode="pulse").input_mode is InputMode.PULSE

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown input mode"):
            LifParams(input_mode="ramp")

    def test_protocol(self):
        proto = stimulus_protocol(LifParams(input_mode=InputMode.PULSE))
        assert proto.name == "pulse"
        assert proto.params == {"interval": 50.0, "width": 5.0, "amplitude": 15.0}
        assert stimulus_protocol(LifParams(I=3.0)).params == {"I": 3.0}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------

class TestStepLif:

    def test_result_fields(self, params):
        p = LifParams(I=2.0)
        r = step_lif(-60.0, 10.0, p)
        assert isinstance(r, StepResult)
        assert r.time == pytest.approx(10.1)
        assert r.applied_current == 2.0
        assert r.forces == ForceVectors(drive=20.0, leak=-10.0, net=10.0)
        # dV = net / tau_m * dt = 10 / 10 * 0.1
        assert r.voltage == pytest.approx(-59.9)
        assert not r.spiked

    def test_rest_is_fixed_point(self, params):
        for r in run_steps(params, 2000):
            assert r.voltage == -70.0
            assert not r.spiked

    def test_subthreshold_current_never_spikes(self):
        p = LifParams(I=1.5)  # R I = 15 mV < thresh - E_L = 20 mV
        results = run_steps(p, 10000)
        assert not any(r.spiked for r in results)
        assert results[-1].voltage == pytest.approx(-55.0, abs=1e-3)

    def test_spike_resets_same_step(self):
        p = LifParams(I=50.0)
        r = step_lif(-50.5, 0.0, p)
        assert r.spiked
        assert r.voltage == p.reset

    def test_reset_invariant(self):
        p = LifParams(I=6.0)
        results = run_steps(p, 5000)
        assert sum(r.spiked for r in results) > 10
        for r in results:
            if r.spiked:
                assert r.voltage == p.reset
            assert r.voltage < p.thresh

    def test_reset_invariant_with_noise(self):
        p = LifParams(input_mode=InputMode.NOISE,
                      noise_config=NoiseConfig(mean=3.0, sigma=20.0))
        results = run_steps(p, 5000, rng=np.random.RandomState(1))
        assert any(r.spiked for r in results)
        for r in results:
            if r.spiked:
                assert r.voltage == p.reset
            assert r.voltage < p.thresh

    def test_periodic_firing(self):
        p = LifParams(I=3.0)
        times = [r.time for r in run_steps(p, 5000) if r.spiked]
        isis = np.diff(times)
        assert len(isis) > 10
        np.testing.assert_allclose(isis, isis[0], atol=1e-6)
        # tau ln((V_inf - reset) / (V_inf - thresh)) with V_inf = -40
        assert isis[0] == pytest.approx(10.0 * math.log(40.0 / 10.0), abs=0.5)

    def test_threshold_below_reset_spikes_every_step(self):
        p = LifParams(thresh=-90.0, reset=-80.0)
        results = run_steps(p, 100)
        assert all(r.spiked for r in results)
        assert all(r.voltage == -80.0 for r in results)

    def test_zero_time_constant_does_not_raise(self):
        r = step_lif(-60.0, 0.0, LifParams(C=0.0))
        assert r.voltage == -math.inf
        assert not r.spiked

    def test_zero_pulse_interval_gives_no_pulse(self):
        p = LifParams(input_mode=InputMode.PULSE,
                      pulse_config=PulseConfig(interval=0.0))
        r = step_lif(-70.0, 0.0, p)
        assert r.applied_current == 0.0
        assert r.voltage == -70.0
        assert not r.spiked

    def test_overflowing_sine_phase_gives_nan(self):
        p = LifParams(input_mode=InputMode.SINE,
                      sine_config=SineConfig(frequency=1e308))
        r = step_lif(-70.0, 10.0, p)
        assert math.isnan(r.applied_current)
        assert math.isnan(r.voltage)
        assert not r.spiked

    def test_params_properties(self, params):
        assert params.tau_m == 10.0
        assert params.rheobase == pytest.approx(2.0)
        assert params.to_dict()["input_mode"] == "constant"
