"""Post-simulation analysis of LIF traces.

Functions accept either a SimulationResult or a sequence of
SimulationSample (a TraceHistory or a ghost trace).
"""

from dataclasses import replace

import numpy as np
import pandas as pd

from neurolabs.utils import get_logger

from .engine import SimulationResult, simulate_lif
from .stimulus import InputMode

LOG = get_logger("simulation.analysis")


def spike_times(trace):
    """Spike times (ms) of a run or of a sequence of samples.

    Returns
    -------
    np.ndarray
    """
    if isinstance(trace, SimulationResult):
        return trace.spike_times
    return np.array([s.time for s in trace if s.spiked], dtype=np.float64)


def interspike_intervals(times):
    """Differences between consecutive event times."""
    return np.diff(np.asarray(times, dtype=np.float64))


def firing_period(trace):
    """Mean interspike interval (ms); nan with fewer than two spikes."""
    isis = interspike_intervals(spike_times(trace))
    return float(np.mean(isis)) if len(isis) > 0 else float("nan")


def isi_cv(trace):
    """Coefficient of variation of the interspike intervals.

    Close to 0 for regular (constant-drive) firing, close to 1 for
    Poisson-like irregular firing. nan with fewer than two intervals.
    """
    isis = interspike_intervals(spike_times(trace))
    if len(isis) < 2 or np.mean(isis) == 0:
        return float("nan")
    return float(np.std(isis) / np.mean(isis))


def fi_curve(params, currents, duration=1000.0):
    """Firing rate as a function of constant input current.

    Parameters
    ----------
    params : LifParams
        Base configuration; input mode is forced to constant.
    currents : array-like
        Currents to test (nA).
    duration : float
        Duration of each run (ms).

    Returns
    -------
    pd.DataFrame
        Columns: current, n_spikes, rate_hz, period_ms.
    """
    rows = []
    for current in currents:
        run_params = replace(params, input_mode=InputMode.CONSTANT, I=float(current))
        result = simulate_lif(run_params, duration=duration, verbose=False)
        rows.append({
            "current": float(current),
            "n_spikes": result.n_spikes,
            "rate_hz": result.mean_rate(),
            "period_ms": firing_period(result),
        })
    LOG.info("f-I sweep over %d currents, rheobase %.2f nA",
             len(rows), params.rheobase)
    return pd.DataFrame(rows)
