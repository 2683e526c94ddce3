"""neurolabs: Numerical core of interactive neuron-dynamics labs.

Small neuron models whose parameters a learner manipulates while the
dynamics evolve frame by frame.

Subpackages:
    dynamics    Planar vector fields, RK4 trajectories, phase-plane helpers
    simulation  Leaky integrate-and-fire stepper, trace history, sessions
    stochastic  Bernoulli and Poisson point processes with running statistics
    utils       Print-based logging

Module:
    config      Lab defaults and YAML configuration loading
"""

__version__ = "0.1.0"
