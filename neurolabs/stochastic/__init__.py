"""stochastic: Frame-driven point processes for the probability lab.

A Bernoulli channel-flip simulator with a sliding outcome window, and a
Poisson spike generator with ISI histograms against the exponential law.
"""

from .bernoulli import (
    BernoulliStats,
    BernoulliSimulator,
)
from .poisson import (
    IsiHistogram,
    PoissonStats,
    PoissonSimulator,
    exponential_density,
    isi_histogram,
    slider_to_rate,
)
