"""Bernoulli trials driven by wall-clock time.

Models a single ion channel flipping between closed (0) and open (1). Trials
arrive at an expected `flip_rate` per second: on each tick a trial happens
with probability flip_rate * elapsed, so the trial rate does not depend on
the host's frame rate. Only the most recent `capacity` outcomes are kept.
"""

from collections import deque
from dataclasses import dataclass
from typing import Optional

import numpy as np

from neurolabs.utils import get_logger

LOG = get_logger("stochastic.bernoulli")


@dataclass(frozen=True)
class BernoulliStats:
    """Aggregate statistics of the outcome window.

    Attributes
    ----------
    success_count : int
        Number of 1 outcomes in the window.
    total : int
        Number of outcomes in the window.
    ratio : float
        success_count / total, 0.0 for an empty window.
    """
    success_count: int
    total: int
    ratio: float


class BernoulliSimulator:
    """Sliding window of Bernoulli outcomes.

    Parameters
    ----------
    capacity : int
        Outcomes kept (oldest dropped first).
    flip_rate : float
        Expected trials per second of elapsed time.
    rng : random source, optional
        Object with a random() method returning uniforms in [0, 1).
        Default: a fresh numpy RandomState.
    """

    def __init__(self, capacity=200, flip_rate=5.0, rng=None):
        self.flip_rate = flip_rate
        self.rng = rng if rng is not None else np.random.RandomState()
        self._outcomes = deque(maxlen=int(capacity))

    @classmethod
    def from_config(cls, config, rng=None):
        """Simulator using the defaults of a LabConfig."""
        return cls(capacity=config.coin_window, flip_rate=config.flip_rate, rng=rng)

    @property
    def capacity(self):
        return self._outcomes.maxlen

    @property
    def outcomes(self):
        """Outcomes in the window, oldest first."""
        return tuple(self._outcomes)

    @property
    def success_count(self):
        return sum(self._outcomes)

    @property
    def total(self):
        return len(self._outcomes)

    @property
    def ratio(self):
        total = self.total
        return self.success_count / total if total > 0 else 0.0

    def stats(self):
        return BernoulliStats(
            success_count=self.success_count,
            total=self.total,
            ratio=self.ratio,
        )

    def observe_tick(self, p, elapsed) -> Optional[int]:
        """Possibly run one trial for a tick of `elapsed` seconds.

        Parameters
        ----------
        p : float
            Success probability of a trial. Not validated: p >= 1 always
            succeeds, p <= 0 never does.
        elapsed : float
            Wall-clock seconds since the previous tick.

        Returns
        -------
        int or None
            The outcome (0 or 1) if a trial happened, else None.
        """
        if self.rng.random() >= self.flip_rate * elapsed:
            return None
        outcome = 1 if self.rng.random() < p else 0
        self._outcomes.append(outcome)
        return outcome

    def tick(self, p, dt_seconds):
        """Advance one tick and return the current statistics."""
        self.observe_tick(p, dt_seconds)
        return self.stats()

    def reset(self):
        """Forget all outcomes (on mode or lab switch)."""
        self._outcomes.clear()
        LOG.debug("Bernoulli window cleared")
