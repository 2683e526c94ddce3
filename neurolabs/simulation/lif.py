"""Single-neuron leaky integrate-and-fire stepper.

The membrane equation

    tau_m dV/dt = -(V - E_L) + R I(t),    tau_m = R C

is advanced with one explicit Euler step per call. When the updated
voltage reaches threshold the neuron spikes and is reset in the same step,
so no supra-threshold value is ever returned.

Each step also reports the "forces" acting on the membrane: the leak
pulling towards E_L and the drive pushing with R I. The Euler increment is
their sum scaled by dt / tau_m.

No parameter is validated. Degenerate settings (threshold below reset,
zero time constant) give defined but meaningless traces.
"""

from dataclasses import dataclass, field

import numpy as np

from .stimulus import (
    InputMode,
    NoiseConfig,
    PulseConfig,
    SineConfig,
    as_input_mode,
    input_current,
)


@dataclass(frozen=True)
class LifParams:
    """Neuron and input configuration for the LIF lab.

    Parameters
    ----------
    C : float
        Membrane capacitance (uF).
    R : float
        Membrane resistance (MOhm).
    E_L : float
        Leak reversal potential (mV).
    I : float
        Baseline current for the constant input mode (nA).
    dt : float
        Timestep (ms).
    thresh : float
        Spike threshold (mV).
    reset : float
        Post-spike reset potential (mV).
    input_mode : InputMode
        Active input generator.
    pulse_config, noise_config, sine_config
        One configuration record per non-constant input mode.
    """
    C: float = 1.0
    R: float = 10.0
    E_L: float = -70.0
    I: float = 0.0
    dt: float = 0.1
    thresh: float = -50.0
    reset: float = -80.0
    input_mode: InputMode = InputMode.CONSTANT
    pulse_config: PulseConfig = field(default_factory=PulseConfig)
    noise_config: NoiseConfig = field(default_factory=NoiseConfig)
    sine_config: SineConfig = field(default_factory=SineConfig)

    def __post_init__(self):
        # Accept "pulse" etc. from config files and UI layers.
        object.__setattr__(self, "input_mode", as_input_mode(self.input_mode))

    @property
    def tau_m(self):
        """Membrane time constant R C (ms)."""
        return self.R * self.C

    @property
    def rheobase(self):
        """Smallest constant current that eventually reaches threshold (nA)."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(self.thresh - self.E_L) / self.R)

    def to_dict(self):
        return {
            "C": self.C,
            "R": self.R,
            "E_L": self.E_L,
            "I": self.I,
            "dt": self.dt,
            "thresh": self.thresh,
            "reset": self.reset,
            "tau_m": self.tau_m,
            "input_mode": self.input_mode.value,
        }


@dataclass(frozen=True)
class ForceVectors:
    """Terms of the membrane equation at one step (mV).

    Attributes
    ----------
    drive : float
        R I(t), pushing the voltage up for positive current.
    leak : float
        -(V - E_L), pulling the voltage back to rest.
    net : float
        drive + leak.
    """
    drive: float = 0.0
    leak: float = 0.0
    net: float = 0.0


@dataclass(frozen=True)
class StepResult:
    """Outcome of one LIF step.

    Attributes
    ----------
    voltage : float
        Membrane potential after the step (reset value if spiked).
    time : float
        Time after the step (ms).
    spiked : bool
        Whether threshold was reached during the step.
    applied_current : float
        I(t) used for the step (nA).
    forces : ForceVectors
        Equation terms evaluated at the pre-step voltage.
    """
    voltage: float
    time: float
    spiked: bool
    applied_current: float
    forces: ForceVectors


def step_lif(voltage, time, params, rng=None):
    """Advance the neuron by one timestep params.dt.

    Parameters
    ----------
    voltage : float
        Membrane potential before the step (mV).
    time : float
        Simulation time before the step (ms).
    params : LifParams
        Neuron and input configuration.
    rng : random source, optional
        Used by the noise input mode only.

    Returns
    -------
    StepResult
    """
    current = input_current(params, time, rng)

    leak = -(voltage - params.E_L)
    drive = params.R * current
    net = leak + drive

    with np.errstate(divide="ignore", invalid="ignore"):
        dv = float(np.float64(net) / params.tau_m * params.dt)

    new_voltage = voltage + dv
    spiked = new_voltage >= params.thresh
    if spiked:
        new_voltage = params.reset

    return StepResult(
        voltage=new_voltage,
        time=time + params.dt,
        spiked=bool(spiked),
        applied_current=current,
        forces=ForceVectors(drive=drive, leak=leak, net=net),
    )
