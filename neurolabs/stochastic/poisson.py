"""Poisson spike trains and their interspike-interval statistics.

On each tick an event is emitted with probability rate * elapsed, which
approximates a homogeneous Poisson process of the given rate independently
of the host's frame rate. Event timestamps are kept for a trailing window
only; the intervals between consecutive retained events should follow the
exponential density

    p(t) = rate * exp(-rate * t)

References:
    Dayan P, Abbott LF (2001). Theoretical Neuroscience, ch. 1.4.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from neurolabs.utils import get_logger

LOG = get_logger("stochastic.poisson")


def slider_to_rate(p):
    """Map the shared 0..1 probability slider to a spike rate (Hz)."""
    return 5.0 + 45.0 * p


def exponential_density(rate, t):
    """Theoretical ISI density rate * exp(-rate * t)."""
    t = np.asarray(t, dtype=np.float64)
    return rate * np.exp(-rate * t)


def isi_histogram(isis, max_isi=0.2, n_bins=30):
    """Count intervals in equal-width bins over [0, max_isi).

    Intervals outside the range are ignored.

    Returns
    -------
    edges : np.ndarray
        Bin edges, shape (n_bins + 1,).
    counts : np.ndarray
        Integer counts per bin, shape (n_bins,).
    """
    isis = np.asarray(isis, dtype=np.float64)
    bin_size = max_isi / n_bins
    in_range = isis[(isis >= 0.0) & (isis < max_isi)]
    idx = np.floor(in_range / bin_size).astype(int)
    # Guard against rounding just below max_isi landing on n_bins.
    idx = idx[idx < n_bins]
    counts = np.bincount(idx, minlength=n_bins)
    edges = np.linspace(0.0, max_isi, n_bins + 1)
    return edges, counts


@dataclass(frozen=True)
class IsiHistogram:
    """ISI histogram with its theoretical overlay.

    Attributes
    ----------
    edges : np.ndarray
        Bin edges (s).
    counts : np.ndarray
        ISI count per bin.
    density : np.ndarray
        counts normalised by (number of ISIs * bin width), comparable to
        the theoretical density. Zeros when there are no ISIs.
    theory : np.ndarray
        rate * exp(-rate * t) at the bin centres.
    """
    edges: np.ndarray
    counts: np.ndarray
    density: np.ndarray
    theory: np.ndarray

    @property
    def centers(self):
        return 0.5 * (self.edges[:-1] + self.edges[1:])


@dataclass(frozen=True)
class PoissonStats:
    """Aggregate statistics of the retained spike train.

    Attributes
    ----------
    spike_count : int
        Events inside the trailing window.
    isi_count : int
        Intervals between them.
    mean_isi : float
        Mean interval (s), nan without intervals.
    histogram : IsiHistogram
    """
    spike_count: int
    isi_count: int
    mean_isi: float
    histogram: IsiHistogram


class PoissonSimulator:
    """Frame-driven Poisson spike generator.

    Parameters
    ----------
    window : float
        Trailing window of retained events (s).
    max_isi : float
        Upper edge of the ISI histogram (s).
    n_bins : int
        Number of histogram bins.
    rng : random source, optional
        Object with a random() method returning uniforms in [0, 1).
        Default: a fresh numpy RandomState.
    """

    def __init__(self, window=5.0, max_isi=0.2, n_bins=30, rng=None):
        self.window = window
        self.max_isi = max_isi
        self.n_bins = n_bins
        self.rng = rng if rng is not None else np.random.RandomState()
        self.clock = 0.0
        self._spike_times = []

    @classmethod
    def from_config(cls, config, rng=None):
        """Simulator using the defaults of a LabConfig."""
        return cls(window=config.poisson_window, max_isi=config.max_isi,
                   n_bins=config.isi_bins, rng=rng)

    @property
    def spike_times(self):
        """Retained event timestamps (s), oldest first."""
        return tuple(self._spike_times)

    def observe_tick(self, rate, elapsed, now: Optional[float] = None):
        """Possibly emit one event for a tick of `elapsed` seconds.

        Parameters
        ----------
        rate : float
            Event rate (Hz). Not validated: a negative rate never fires.
        elapsed : float
            Wall-clock seconds since the previous tick.
        now : float, optional
            Timestamp of this tick (s). Default: internal clock + elapsed.

        Returns
        -------
        bool
            Whether an event was emitted.
        """
        if now is None:
            now = self.clock + elapsed
        self.clock = now

        emitted = self.rng.random() < rate * elapsed
        if emitted:
            self._spike_times.append(now)

        cutoff = now - self.window
        if self._spike_times and self._spike_times[0] < cutoff:
            self._spike_times = [t for t in self._spike_times if t >= cutoff]
        return bool(emitted)

    def isis(self):
        """Intervals between consecutive retained events (s)."""
        return np.diff(np.asarray(self._spike_times, dtype=np.float64))

    def theoretical_density(self, rate, t):
        return exponential_density(rate, t)

    def histogram(self, rate):
        """ISI histogram of the retained events, with the overlay for `rate`."""
        isis = self.isis()
        edges, counts = isi_histogram(isis, self.max_isi, self.n_bins)
        bin_size = self.max_isi / self.n_bins
        if len(isis) > 0:
            density = counts / (len(isis) * bin_size)
        else:
            density = np.zeros(self.n_bins, dtype=np.float64)
        centers = 0.5 * (edges[:-1] + edges[1:])
        return IsiHistogram(
            edges=edges,
            counts=counts,
            density=density,
            theory=exponential_density(rate, centers),
        )

    def stats(self, rate):
        isis = self.isis()
        return PoissonStats(
            spike_count=len(self._spike_times),
            isi_count=len(isis),
            mean_isi=float(np.mean(isis)) if len(isis) > 0 else float("nan"),
            histogram=self.histogram(rate),
        )

    def tick(self, rate, dt_seconds):
        """Advance one tick and return the current statistics."""
        self.observe_tick(rate, dt_seconds)
        return self.stats(rate)

    def reset(self):
        """Forget all events and restart the clock (on mode or lab switch)."""
        self._spike_times = []
        self.clock = 0.0
        LOG.debug("Poisson spike train cleared")
