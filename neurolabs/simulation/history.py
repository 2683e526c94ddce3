"""Bounded rolling history of LIF samples.

The live trace keeps the most recent `capacity` samples (oldest evicted
first). A snapshot is an independent, immutable copy used as the "ghost"
trace for before/after comparisons.
"""

from collections import deque
from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class SimulationSample:
    """One recorded LIF step.

    Attributes
    ----------
    time : float
        Time after the step (ms).
    voltage : float
        Membrane potential after the step (mV).
    spiked : bool
        Whether the step produced a spike.
    applied_current : float
        Input current used for the step (nA).
    """
    time: float
    voltage: float
    spiked: bool
    applied_current: float

    @classmethod
    def from_step(cls, result):
        """Sample from a StepResult."""
        return cls(
            time=result.time,
            voltage=result.voltage,
            spiked=result.spiked,
            applied_current=result.applied_current,
        )


COLUMNS = ["time", "voltage", "spiked", "applied_current"]


class TraceHistory:
    """Capacity-bounded FIFO of SimulationSample.

    Parameters
    ----------
    capacity : int
        Maximum number of samples retained.
    """

    def __init__(self, capacity=500):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._samples = deque(maxlen=int(capacity))

    @property
    def capacity(self):
        return self._samples.maxlen

    @property
    def samples(self):
        """Read-only view of the retained samples, oldest first."""
        return tuple(self._samples)

    def append(self, sample):
        """Add a sample, evicting the oldest one when full."""
        self._samples.append(sample)

    def snapshot(self):
        """Frozen copy of the current contents.

        The returned tuple is unaffected by later append() or clear().
        """
        return tuple(self._samples)

    def clear(self):
        self._samples.clear()

    def to_frame(self):
        """Samples as a DataFrame with one row per step."""
        return samples_to_frame(self._samples)

    def __len__(self):
        return len(self._samples)

    def __iter__(self):
        return iter(self._samples)

    def __getitem__(self, index):
        return self._samples[index]

    def __repr__(self):
        return f"TraceHistory({len(self)}/{self.capacity} samples)"


def samples_to_frame(samples):
    """Convert a sequence of SimulationSample (e.g. a ghost trace) to a DataFrame."""
    return pd.DataFrame(
        [(s.time, s.voltage, s.spiked, s.applied_current) for s in samples],
        columns=COLUMNS,
    )
