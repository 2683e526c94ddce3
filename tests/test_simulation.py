"""Tests for fixed-duration LIF runs and spike-train analysis.

Uses the default lab neuron (tau_m = 10 ms, rheobase 2 nA) under constant,
pulsed and noisy drive.
"""

import numpy as np
import pandas as pd
import pytest

from neurolabs.simulation.analysis import (
    fi_curve, firing_period, interspike_intervals, isi_cv, spike_times,
)
from neurolabs.simulation.engine import SimulationResult, simulate_lif
from neurolabs.simulation.lif import LifParams
from neurolabs.simulation.session import LifSession
from neurolabs.simulation.stimulus import InputMode, NoiseConfig, PulseConfig


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TestEngine:

    def test_no_input_no_spikes(self):
        result = simulate_lif(LifParams(), duration=100.0)
        assert isinstance(result, SimulationResult)
        assert result.n_spikes == 0
        assert len(result.time) == 1000
        np.testing.assert_array_equal(result.voltage, -70.0)

    def test_trace_shapes(self):
        result = simulate_lif(LifParams(I=3.0), duration=50.0)
        n = len(result.time)
        assert n == 500
        assert result.voltage.shape == (n,)
        assert result.current.shape == (n,)
        assert result.spiked.dtype == bool
        assert result.time[0] == pytest.approx(0.1)
        assert result.duration == pytest.approx(50.0)

    def test_strong_current_fires(self):
        result = simulate_lif(LifParams(I=6.0), duration=1000.0)
        assert result.n_spikes > 100
        assert result.mean_rate() == pytest.approx(result.n_spikes)
        np.testing.assert_array_equal(result.voltage[result.spiked], -80.0)

    def test_pulse_protocol(self):
        params = LifParams(input_mode=InputMode.PULSE,
                           pulse_config=PulseConfig(interval=50.0, width=5.0,
                                                    amplitude=15.0))
        result = simulate_lif(params, duration=200.0)
        assert result.protocol.name == "pulse"
        assert set(np.unique(result.current)) == {0.0, 15.0}
        assert 0 < result.n_spikes
        assert np.all(result.current[result.spiked] == 15.0)

    def test_noise_seed_reproducible(self):
        params = LifParams(input_mode=InputMode.NOISE)
        r1 = simulate_lif(params, duration=200.0, seed=42)
        r2 = simulate_lif(params, duration=200.0, seed=42)
        r3 = simulate_lif(params, duration=200.0, seed=99)
        np.testing.assert_array_equal(r1.voltage, r2.voltage)
        assert not np.array_equal(r1.current, r3.current)

    def test_initial_voltage(self):
        result = simulate_lif(LifParams(), duration=1.0, v0=-60.0)
        assert result.voltage[0] == pytest.approx(-60.0 + (-10.0 / 10.0) * 0.1)

    def test_matches_session(self):
        """A batch run and an interactive session produce the same spikes."""
        params = LifParams(I=6.0)
        session = LifSession(params=params)
        for _ in range(400):
            session.step()
        result = simulate_lif(params, duration=40.0)
        np.testing.assert_array_equal(spike_times(session.history),
                                      spike_times(result))


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------

class TestAnalysis:

    def test_interspike_intervals(self):
        np.testing.assert_allclose(interspike_intervals([1.0, 3.0, 6.0]), [2.0, 3.0])
        assert len(interspike_intervals([])) == 0

    def test_period_needs_two_spikes(self):
        result = simulate_lif(LifParams(), duration=100.0)
        assert np.isnan(firing_period(result))

    def test_period_decreases_with_current(self):
        periods = [firing_period(simulate_lif(LifParams(I=i), duration=500.0))
                   for i in (2.5, 3.0, 4.0, 6.0, 10.0)]
        assert all(np.isfinite(periods))
        assert all(b < a for a, b in zip(periods, periods[1:]))

    def test_constant_drive_is_regular(self):
        result = simulate_lif(LifParams(I=4.0), duration=500.0)
        assert isi_cv(result) < 1e-6

    def test_noise_drive_is_irregular(self):
        params = LifParams(input_mode=InputMode.NOISE,
                           noise_config=NoiseConfig(mean=2.0, sigma=30.0))
        result = simulate_lif(params, duration=2000.0, seed=3)
        assert result.n_spikes > 5
        assert isi_cv(result) > 0.05

    def test_fi_curve(self):
        df = fi_curve(LifParams(), currents=[0.0, 1.0, 1.9, 2.5, 4.0, 8.0],
                      duration=500.0)
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["current", "n_spikes", "rate_hz", "period_ms"]
        below = df[df["current"] < 2.0]
        above = df[df["current"] > 2.0]
        assert (below["n_spikes"] == 0).all()
        assert (above["n_spikes"] > 0).all()
        assert above["rate_hz"].is_monotonic_increasing

    def test_fi_curve_ignores_input_mode(self):
        params = LifParams(input_mode=InputMode.SINE)
        df = fi_curve(params, currents=[0.0], duration=100.0)
        assert df["n_spikes"].iloc[0] == 0

    def test_fi_curve_logs_once_per_sweep(self, capsys):
        fi_curve(LifParams(), currents=[0.0, 3.0, 6.0], duration=50.0)
        out = capsys.readouterr().out
        assert out.count("neurolabs:simulation.analysis INFO") == 1
        assert "neurolabs:simulation.engine" not in out

    def test_quiet_run(self, capsys):
        simulate_lif(LifParams(I=3.0), duration=10.0, verbose=False)
        assert capsys.readouterr().out == ""
        simulate_lif(LifParams(I=3.0), duration=10.0)
        assert capsys.readouterr().out.count("neurolabs:simulation.engine INFO") == 2
