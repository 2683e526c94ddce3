"""Configuration of the labs.

All tunable defaults live in one frozen LabConfig. A configuration can be
the built-in DEFAULT_CONFIG, or loaded from a YAML file whose top-level keys
are LabConfig fields, e.g.

    history_capacity: 1000
    flip_rate: 10.0
    lif:
      R: 20.0
      input_mode: pulse
      pulse_config:
        interval: 25.0

Keys that are not LabConfig fields are rejected.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml

from neurolabs.simulation.lif import LifParams
from neurolabs.simulation.stimulus import NoiseConfig, PulseConfig, SineConfig
from neurolabs.utils import get_logger

LOG = get_logger("config")


_LIF_RECORDS = {
    "pulse_config": PulseConfig,
    "noise_config": NoiseConfig,
    "sine_config": SineConfig,
}


@dataclass(frozen=True)
class LabConfig:
    """Defaults shared by the LIF, phase-plane and probability labs.

    Attributes
    ----------
    history_capacity : int
        Samples kept in the live LIF trace.
    steps_per_frame : int
        LIF steps issued per rendered frame.
    coin_window : int
        Outcomes kept by the Bernoulli simulator.
    flip_rate : float
        Expected Bernoulli trials per second.
    poisson_window : float
        Trailing window of retained Poisson events (s).
    max_isi : float
        Upper edge of the ISI histogram (s).
    isi_bins : int
        Number of ISI histogram bins.
    trajectory_dt : float
        Step size for hover trajectories.
    trajectory_steps : int
        Maximum steps per hover trajectory.
    lif : dict
        Overrides applied to LifParams defaults.
    """
    history_capacity: int = 500
    steps_per_frame: int = 2
    coin_window: int = 200
    flip_rate: float = 5.0
    poisson_window: float = 5.0
    max_isi: float = 0.2
    isi_bins: int = 30
    trajectory_dt: float = 0.02
    trajectory_steps: int = 400
    lif: dict = field(default_factory=dict)

    def lif_params(self):
        """LifParams built from the defaults plus the `lif` overrides."""
        return lif_params_from_dict(self.lif)

    def with_overrides(self, **overrides):
        return replace(self, **overrides)


DEFAULT_CONFIG = LabConfig()


def lif_params_from_dict(values):
    """Build LifParams from a (possibly nested) mapping of overrides."""
    values = dict(values or {})
    known = {f.name for f in fields(LifParams)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown LIF parameters: {sorted(unknown)}")

    kwargs = {}
    for name, value in values.items():
        record = _LIF_RECORDS.get(name)
        if record is not None and isinstance(value, dict):
            value = record(**value)
        kwargs[name] = value
    return LifParams(**kwargs)


def config_from_dict(values):
    """Build a LabConfig from a mapping, rejecting unknown keys."""
    values = dict(values or {})
    known = {f.name for f in fields(LabConfig)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
    if values.get("lif") is None:
        values["lif"] = {}
    config = LabConfig(**values)
    # Fail early on bad LIF overrides rather than at session start.
    config.lif_params()
    return config


def load_config(path):
    """Load a LabConfig from a YAML file.

    Parameters
    ----------
    path : str or Path
        YAML file. An empty file yields the defaults.

    Returns
    -------
    LabConfig
    """
    path = Path(path)
    with open(path) as f:
        values = yaml.safe_load(f)
    LOG.info("Loaded lab configuration from %s", path)
    return config_from_dict(values)
