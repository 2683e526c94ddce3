"""Two-dimensional vector fields for the phase-plane labs.

Every lab model is a planar system

    dx/dt = f(x, y; c)
    dy/dt = g(x, y; c)

where x is the voltage-like axis, y the recovery-like axis and c a single
user-controlled scalar whose meaning depends on the model (injected current,
damping coefficient, growth modulation).

Models are a closed enumeration (ModelVariant) paired with a frozen bundle
of structural constants. All models are evaluated in one function,
derivative().

References:
    FitzHugh R (1961). Biophys J 1(6):445-466.
    Nagumo J, Arimoto S, Yoshizawa S (1962). Proc IRE 50(10):2061-2070.
    Strogatz SH (2015). Nonlinear Dynamics and Chaos, 2nd ed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class State(NamedTuple):
    """A point in the phase plane."""
    x: float
    y: float


class Derivative(NamedTuple):
    """Time derivative of a State."""
    dx: float
    dy: float


class ModelVariant(Enum):
    """Planar models available to the phase-plane labs.

    LINEAR_LEAK        leaky capacitor, c is the injected current
    DAMPED_RESONATOR   harmonic oscillator, c is the damping coefficient
    FITZHUGH_NAGUMO    excitable neuron, c is the injected current
    GENERIC_CUBIC      same cubic system, exposed as the general teaching model
    LOTKA_VOLTERRA     predator-prey, c modulates prey growth
    LOGISTIC           saturating growth on x, c modulates the growth rate
    """
    LINEAR_LEAK = "linear-leak"
    DAMPED_RESONATOR = "damped-resonator"
    FITZHUGH_NAGUMO = "fitzhugh-nagumo"
    GENERIC_CUBIC = "generic-cubic"
    LOTKA_VOLTERRA = "lotka-volterra"
    LOGISTIC = "logistic"


# ---------------------------------------------------------------------------
# Structural constants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LinearConstants:
    """The linear leak has no structural constants."""


@dataclass(frozen=True)
class ResonatorConstants:
    """Damped resonator. Damping is clamped to at least min_damping."""
    min_damping: float = 0.0


@dataclass(frozen=True)
class CubicConstants:
    """FitzHugh-Nagumo recovery constants.

    Parameters
    ----------
    a : float
        Recovery offset.
    b : float
        Recovery self-coupling.
    tau : float
        Recovery time-scale ratio (slow variable).
    """
    a: float = 0.7
    b: float = 0.8
    tau: float = 0.08


@dataclass(frozen=True)
class LotkaVolterraConstants:
    """Predator-prey interaction rates. Prey growth is alpha = 1 + 0.5 c."""
    beta: float = 0.5
    delta: float = 0.5
    gamma: float = 1.0
    alpha_base: float = 1.0
    alpha_gain: float = 0.5


@dataclass(frozen=True)
class LogisticConstants:
    """Logistic growth with carrying capacity K. Rate is r + gain * c."""
    r: float = 0.8
    K: float = 4.0
    gain: float = 0.5


VARIANT_CONSTANTS = {
    ModelVariant.LINEAR_LEAK: LinearConstants(),
    ModelVariant.DAMPED_RESONATOR: ResonatorConstants(),
    ModelVariant.FITZHUGH_NAGUMO: CubicConstants(),
    ModelVariant.GENERIC_CUBIC: CubicConstants(),
    ModelVariant.LOTKA_VOLTERRA: LotkaVolterraConstants(),
    ModelVariant.LOGISTIC: LogisticConstants(),
}


def as_variant(variant):
    """Coerce a ModelVariant or its string value to a ModelVariant.

    Raises
    ------
    ValueError
        If the string does not name a known model.
    """
    if isinstance(variant, ModelVariant):
        return variant
    try:
        return ModelVariant(variant)
    except ValueError:
        raise ValueError(f"Unknown model variant '{variant}'. "
                         f"Available: {[v.value for v in ModelVariant]}") from None


def variant_constants(variant):
    """Structural constants bundle for a model."""
    return VARIANT_CONSTANTS[as_variant(variant)]


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def derivative(state, control, variant):
    """Evaluate the vector field at a point.

    Pure; defined for any finite input (large states may give large
    derivatives, never undefined ones).

    Parameters
    ----------
    state : State or tuple of float
        (x, y) point in the phase plane.
    control : float
        Control input, interpreted per model.
    variant : ModelVariant or str
        Which model to evaluate.

    Returns
    -------
    Derivative
    """
    x, y = state
    variant = as_variant(variant)
    k = VARIANT_CONSTANTS[variant]

    if variant is ModelVariant.LINEAR_LEAK:
        return Derivative(-x + control, -y)

    if variant is ModelVariant.DAMPED_RESONATOR:
        # Damping never drops below min_damping.
        damping = max(k.min_damping, control)
        return Derivative(y, -x - damping * y)

    if variant in (ModelVariant.FITZHUGH_NAGUMO, ModelVariant.GENERIC_CUBIC):
        return Derivative(
            x - (x * x * x) / 3.0 - y + control,
            k.tau * (x + k.a - k.b * y),
        )

    if variant is ModelVariant.LOTKA_VOLTERRA:
        alpha = k.alpha_base + k.alpha_gain * control
        return Derivative(
            alpha * x - k.beta * x * y,
            k.delta * x * y - k.gamma * y,
        )

    # LOGISTIC
    rate = k.r + k.gain * control
    return Derivative(rate * x * (1.0 - x / k.K), -y)


evaluate_field = derivative
