"""Input-current generators for the LIF lab.

Each generator returns the instantaneous drive current I(t) (nA) for one
step. The active generator is selected by LifParams.input_mode and reads
its own configuration record:

    constant   I(t) = I
    pulse      I(t) = A  while  t mod interval < width,  else 0
    noise      I(t) = mean + sigma * z,  z ~ N(0, 1)
    sine       I(t) = A * sin(2 pi f t)

Time is in ms; the sine frequency is in Hz.
"""

from dataclasses import asdict, dataclass
from enum import Enum

import numpy as np


class InputMode(Enum):
    """Which input generator drives the neuron."""
    CONSTANT = "constant"
    PULSE = "pulse"
    NOISE = "noise"
    SINE = "sine"


@dataclass(frozen=True)
class PulseConfig:
    """Periodic rectangular pulse train.

    Attributes
    ----------
    interval : float
        Period between pulse onsets (ms).
    width : float
        Pulse duration (ms).
    amplitude : float
        Pulse height (nA).
    """
    interval: float = 50.0
    width: float = 5.0
    amplitude: float = 15.0


@dataclass(frozen=True)
class NoiseConfig:
    """Gaussian white-noise current, redrawn every step (nA)."""
    mean: float = 2.0
    sigma: float = 5.0


@dataclass(frozen=True)
class SineConfig:
    """Zero-centred sinusoidal current (frequency in Hz, amplitude in nA)."""
    frequency: float = 5.0
    amplitude: float = 10.0


@dataclass
class StimulusProtocol:
    """Description of the input used in a run, for provenance tracking.

    Attributes
    ----------
    name : str
        Input mode name.
    params : dict
        Configuration of the active generator.
    """
    name: str
    params: dict


_DEFAULT_RNG = np.random.RandomState()


def default_rng():
    """The process-wide random source used when none is injected."""
    return _DEFAULT_RNG


def as_input_mode(mode):
    """Coerce an InputMode or its string value to an InputMode."""
    if isinstance(mode, InputMode):
        return mode
    try:
        return InputMode(mode)
    except ValueError:
        raise ValueError(f"Unknown input mode '{mode}'. "
                         f"Available: {[m.value for m in InputMode]}") from None


def constant_current(params, time, rng=None):
    return params.I


def pulse_current(params, time, rng=None):
    cfg = params.pulse_config
    # fmod keeps the sign of time. A zero interval gives nan, hence no pulse.
    with np.errstate(invalid="ignore", divide="ignore"):
        cycle_time = np.fmod(np.float64(time), cfg.interval)
    return cfg.amplitude if cycle_time < cfg.width else 0.0


def noise_current(params, time, rng=None):
    cfg = params.noise_config
    rng = rng if rng is not None else default_rng()
    return cfg.mean + cfg.sigma * float(rng.standard_normal())


def sine_current(params, time, rng=None):
    cfg = params.sine_config
    phase = 2.0 * np.pi * cfg.frequency * (time / 1000.0)
    with np.errstate(invalid="ignore", over="ignore"):
        return float(cfg.amplitude * np.sin(np.float64(phase)))


GENERATORS = {
    InputMode.CONSTANT: constant_current,
    InputMode.PULSE: pulse_current,
    InputMode.NOISE: noise_current,
    InputMode.SINE: sine_current,
}


def input_current(params, time, rng=None):
    """Instantaneous drive current for the active input mode.

    Parameters
    ----------
    params : LifParams
        Neuron and input configuration.
    time : float
        Current simulation time (ms).
    rng : random source, optional
        Object with a standard_normal() method (numpy RandomState or
        Generator). Only the noise generator draws from it.

    Returns
    -------
    float
        Current (nA).
    """
    generator = GENERATORS[as_input_mode(params.input_mode)]
    return generator(params, time, rng)


def stimulus_protocol(params):
    """Provenance record for the input configured in params."""
    mode = as_input_mode(params.input_mode)
    if mode is InputMode.PULSE:
        config = asdict(params.pulse_config)
    elif mode is InputMode.NOISE:
        config = asdict(params.noise_config)
    elif mode is InputMode.SINE:
        config = asdict(params.sine_config)
    else:
        config = {"I": params.I}
    return StimulusProtocol(name=mode.value, params=config)
