"""Fixed-duration LIF runs.

Repeats step_lif for a whole duration and collects the full trace as numpy
arrays. Used for offline analysis (firing periods, f-I curves) of the same
neuron the interactive session steps frame by frame.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from neurolabs.utils import get_logger

from .lif import step_lif
from .stimulus import StimulusProtocol, stimulus_protocol

LOG = get_logger("simulation.engine")


@dataclass
class SimulationResult:
    """Results from a LIF run.

    Attributes
    ----------
    time : np.ndarray
        Time after each step (ms), shape (n_steps,).
    voltage : np.ndarray
        Membrane potential after each step (mV).
    current : np.ndarray
        Input current used at each step (nA).
    spiked : np.ndarray
        Boolean spike flag per step.
    dt : float
        Timestep used (ms).
    duration : float
        Total simulated time (ms).
    protocol : StimulusProtocol, optional
        Input used for the run.
    """
    time: np.ndarray
    voltage: np.ndarray
    current: np.ndarray
    spiked: np.ndarray
    dt: float = 0.1
    duration: float = 1000.0
    protocol: Optional[StimulusProtocol] = field(default=None)

    @property
    def spike_times(self):
        """Times (ms) of the steps that ended in a spike."""
        return self.time[self.spiked]

    @property
    def n_spikes(self):
        return int(np.count_nonzero(self.spiked))

    def mean_rate(self):
        """Mean firing rate over the run (Hz)."""
        duration_s = self.duration / 1000.0
        return self.n_spikes / duration_s if duration_s > 0 else 0.0


def simulate_lif(params, duration=1000.0, v0=None, rng=None, seed=None,
                 verbose=True):
    """Run the LIF neuron for a fixed duration.

    Parameters
    ----------
    params : LifParams
        Neuron and input configuration (params.dt is the timestep).
    duration : float
        Simulation duration (ms).
    v0 : float, optional
        Initial voltage. Default: params.E_L.
    rng : random source, optional
        Injected into the noise generator. Takes precedence over seed.
    seed : int, optional
        Seed for a fresh RandomState when rng is not given.
    verbose : bool
        Log the start and completion of the run.

    Returns
    -------
    SimulationResult
    """
    if rng is None:
        rng = np.random.RandomState(seed)

    n_steps = int(round(duration / params.dt))
    time = np.zeros(n_steps, dtype=np.float64)
    voltage = np.zeros(n_steps, dtype=np.float64)
    current = np.zeros(n_steps, dtype=np.float64)
    spiked = np.zeros(n_steps, dtype=bool)

    v = params.E_L if v0 is None else v0
    t = 0.0

    if verbose:
        LOG.info("Starting LIF run: %.0f ms, dt=%.2f ms, input=%s",
                 duration, params.dt, params.input_mode.value)

    for step in range(n_steps):
        result = step_lif(v, t, params, rng)
        v, t = result.voltage, result.time
        time[step] = t
        voltage[step] = v
        current[step] = result.applied_current
        spiked[step] = result.spiked

    sim = SimulationResult(
        time=time,
        voltage=voltage,
        current=current,
        spiked=spiked,
        dt=params.dt,
        duration=n_steps * params.dt,
        protocol=stimulus_protocol(params),
    )
    if verbose:
        LOG.info("LIF run complete: %d spikes, mean rate %.2f Hz",
                 sim.n_spikes, sim.mean_rate())
    return sim
