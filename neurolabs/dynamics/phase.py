"""Phase-plane helpers: flow-field sampling and fixed points.

field_grid samples a model on a regular grid for quiver-style rendering.
fixed_point locates the equilibrium a lab marks on the plane.
"""

import numpy as np
from scipy.optimize import newton

from .fields import ModelVariant, State, as_variant, derivative, variant_constants


# Viewing windows of the phase-plane labs, as (min, max, step).
DEFAULT_RANGES = {
    "centered": ((-5.0, 5.0, 0.5), (-4.0, 4.0, 0.5)),
    "positive": ((-0.5, 10.0, 0.5), (-0.5, 8.0, 0.5)),
}


def default_ranges(variant):
    """Grid ranges (x_range, y_range) suited to a model."""
    variant = as_variant(variant)
    if variant in (ModelVariant.LOTKA_VOLTERRA, ModelVariant.LOGISTIC):
        return DEFAULT_RANGES["positive"]
    return DEFAULT_RANGES["centered"]


def _axis(bounds):
    lo, hi, step = bounds
    n = int(np.floor((hi - lo) / step + 1e-9)) + 1
    return lo + step * np.arange(n)


def field_grid(control, variant, x_range=None, y_range=None):
    """Sample the vector field on a regular grid.

    Parameters
    ----------
    control : float
        Control input for the field.
    variant : ModelVariant or str
        Which model to sample.
    x_range, y_range : tuple of float, optional
        (min, max, step), both ends inclusive. Default: the model's
        usual viewing window.

    Returns
    -------
    X, Y, DX, DY, speed : np.ndarray
        Arrays of shape (n_y, n_x). speed is the Euclidean norm of (DX, DY).
    """
    variant = as_variant(variant)
    if x_range is None or y_range is None:
        default_x, default_y = default_ranges(variant)
        x_range = x_range or default_x
        y_range = y_range or default_y

    X, Y = np.meshgrid(_axis(x_range), _axis(y_range))
    DX, DY = derivative((X, Y), control, variant)
    DX = np.broadcast_to(np.asarray(DX, dtype=np.float64), X.shape)
    DY = np.broadcast_to(np.asarray(DY, dtype=np.float64), X.shape)
    speed = np.hypot(DX, DY)
    return X, Y, DX, DY, speed


def fixed_point(control, variant):
    """Equilibrium of a model at a given control input.

    For the cubic models, the equilibrium lies where the cubic nullcline
    v - v^3/3 + c meets the line (v + a)/b, i.e. on the root of

        (b/3) v^3 + (1 - b) v + (a - b c) = 0

    which is monotone for b < 1, hence unique. It is found by Newton
    iteration from v = 0.

    Returns
    -------
    State
    """
    variant = as_variant(variant)
    k = variant_constants(variant)

    if variant is ModelVariant.LINEAR_LEAK:
        return State(float(control), 0.0)

    if variant is ModelVariant.DAMPED_RESONATOR:
        return State(0.0, 0.0)

    if variant in (ModelVariant.FITZHUGH_NAGUMO, ModelVariant.GENERIC_CUBIC):
        a, b = k.a, k.b
        v = newton(
            lambda v: (b / 3.0) * v ** 3 + (1.0 - b) * v + (a - b * control),
            0.0,
            fprime=lambda v: b * v * v + (1.0 - b),
        )
        v = float(v)
        return State(v, (v + a) / b)

    if variant is ModelVariant.LOTKA_VOLTERRA:
        alpha = k.alpha_base + k.alpha_gain * control
        return State(k.gamma / k.delta, alpha / k.beta)

    # LOGISTIC: the non-trivial equilibrium at carrying capacity.
    return State(k.K, 0.0)
