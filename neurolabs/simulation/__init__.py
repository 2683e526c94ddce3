"""simulation: Single-neuron leaky integrate-and-fire lab.

Discrete-time LIF stepper with pluggable input generators, a bounded
trace history with ghost snapshots, an interactive session object, and
batch runs for offline analysis.
"""

from .stimulus import (
    InputMode,
    PulseConfig,
    NoiseConfig,
    SineConfig,
    StimulusProtocol,
    input_current,
    stimulus_protocol,
)
from .lif import (
    LifParams,
    ForceVectors,
    StepResult,
    step_lif,
)
from .history import (
    SimulationSample,
    TraceHistory,
    samples_to_frame,
)
from .session import LifSession
from .engine import (
    SimulationResult,
    simulate_lif,
)
from .analysis import (
    spike_times,
    interspike_intervals,
    firing_period,
    isi_cv,
    fi_curve,
)
