"""Interactive LIF session.

A LifSession owns all per-frame mutable state of the LIF lab: the current
parameters, voltage and time, the last force triple, the rolling trace
history and the optional ghost trace. The host calls advance_frame() once
per rendered frame; nothing runs in the background.

A session has one owner. Confine it to a single thread, or guard each
step-and-append with one lock if it ever has to be shared.
"""

from dataclasses import replace

from neurolabs.utils import get_logger

from .history import SimulationSample, TraceHistory
from .lif import ForceVectors, LifParams, step_lif
from .stimulus import as_input_mode, InputMode

LOG = get_logger("simulation.session")


_CONFIG_FIELDS = {
    InputMode.PULSE: "pulse_config",
    InputMode.NOISE: "noise_config",
    InputMode.SINE: "sine_config",
}


class LifSession:
    """State of one running LIF lab.

    Parameters
    ----------
    params : LifParams, optional
        Initial configuration. Default: LifParams().
    capacity : int
        Samples kept in the live history.
    steps_per_frame : int
        Steps issued by advance_frame() while running.
    rng : random source, optional
        Injected into the noise input generator.
    """

    def __init__(self, params=None, capacity=500, steps_per_frame=2, rng=None):
        self.params = params if params is not None else LifParams()
        self.steps_per_frame = steps_per_frame
        self.rng = rng
        self.is_running = False
        self.history = TraceHistory(capacity)
        self.ghost_trace = None
        self.time = 0.0
        self.voltage = self.params.E_L
        self.forces = ForceVectors()

    @classmethod
    def from_config(cls, config, rng=None):
        """Session using the defaults of a LabConfig."""
        return cls(
            params=config.lif_params(),
            capacity=config.history_capacity,
            steps_per_frame=config.steps_per_frame,
            rng=rng,
        )

    # -- parameters ---------------------------------------------------------

    def set_params(self, **changes):
        """Replace individual LifParams fields, e.g. set_params(I=2.0)."""
        self.params = replace(self.params, **changes)
        return self.params

    def update_config(self, mode, **changes):
        """Update fields of one input mode's configuration record.

        Parameters
        ----------
        mode : InputMode or str
            "pulse", "noise" or "sine".
        **changes
            Fields of that record, e.g. update_config("pulse", width=10.0).
        """
        mode = as_input_mode(mode)
        if mode not in _CONFIG_FIELDS:
            raise ValueError(f"Input mode '{mode.value}' has no configuration record")
        name = _CONFIG_FIELDS[mode]
        record = replace(getattr(self.params, name), **changes)
        self.params = replace(self.params, **{name: record})
        return record

    # -- stepping -----------------------------------------------------------

    def step(self):
        """Advance one timestep and record the sample.

        Returns
        -------
        StepResult
        """
        result = step_lif(self.voltage, self.time, self.params, self.rng)
        self.voltage = result.voltage
        self.time = result.time
        self.forces = result.forces
        self.history.append(SimulationSample.from_step(result))
        return result

    def advance_frame(self):
        """Issue steps_per_frame steps if running; return their results."""
        if not self.is_running:
            return []
        return [self.step() for _ in range(self.steps_per_frame)]

    def start(self):
        self.is_running = True

    def pause(self):
        self.is_running = False

    def reset(self):
        """Return to rest at t = 0 with empty history and no ghost trace."""
        self.time = 0.0
        self.voltage = self.params.E_L
        self.forces = ForceVectors()
        self.history.clear()
        self.ghost_trace = None
        LOG.debug("Session reset to E_L=%.1f mV", self.params.E_L)

    # -- ghost trace --------------------------------------------------------

    def capture_ghost_trace(self):
        """Freeze the current history as the ghost trace."""
        self.ghost_trace = self.history.snapshot()
        LOG.info("Captured ghost trace with %d samples", len(self.ghost_trace))
        return self.ghost_trace

    def clear_ghost_trace(self):
        self.ghost_trace = None
        LOG.debug("Ghost trace cleared")

    def __repr__(self):
        state = "running" if self.is_running else "paused"
        return (f"LifSession({state}, t={self.time:.1f} ms, "
                f"V={self.voltage:.2f} mV, {len(self.history)} samples)")
