"""Fixed-step integrators over the planar vector fields.

rk4_step is the workhorse for trajectory tracing (hover-traced flow
lines). euler_step is kept for side-by-side comparison with the
first-order scheme the LIF stepper uses.

Neither integrator holds state: both are pure functions of
(state, control, variant, dt).
"""

from .fields import State, as_variant, derivative


def euler_step(state, control, variant, dt):
    """Advance one explicit Euler step.

    Returns
    -------
    State
    """
    x, y = state
    dx, dy = derivative((x, y), control, variant)
    return State(x + dt * dx, y + dt * dy)


def rk4_step(state, control, variant, dt):
    """Advance one classic fourth-order Runge-Kutta step.

    k1 = f(s)
    k2 = f(s + dt/2 * k1)
    k3 = f(s + dt/2 * k2)
    k4 = f(s + dt * k3)
    s' = s + dt/6 * (k1 + 2 k2 + 2 k3 + k4)

    Parameters
    ----------
    state : State or tuple of float
        Current (x, y).
    control : float
        Control input for the field.
    variant : ModelVariant or str
        Which vector field to integrate.
    dt : float
        Step size.

    Returns
    -------
    State
    """
    variant = as_variant(variant)
    x, y = state
    half = 0.5 * dt

    k1x, k1y = derivative((x, y), control, variant)
    k2x, k2y = derivative((x + half * k1x, y + half * k1y), control, variant)
    k3x, k3y = derivative((x + half * k2x, y + half * k2y), control, variant)
    k4x, k4y = derivative((x + dt * k3x, y + dt * k3y), control, variant)

    return State(
        x + dt / 6.0 * (k1x + 2.0 * k2x + 2.0 * k3x + k4x),
        y + dt / 6.0 * (k1y + 2.0 * k2y + 2.0 * k3y + k4y),
    )


STEPPERS = {
    "rk4": rk4_step,
    "euler": euler_step,
}


def bounded_box(xmin, xmax, ymin, ymax):
    """Build a bounds check accepting states inside a closed rectangle."""
    def inside(state):
        x, y = state
        return xmin <= x <= xmax and ymin <= y <= ymax
    return inside


def integrate_trajectory(start, control, variant, dt, max_steps,
                         bounds_check=None, method="rk4"):
    """Lazily trace a trajectory from a starting point.

    Yields the start state, then up to max_steps successive states. If
    bounds_check is given and returns False for a new state, that state is
    still yielded (so a drawn path reaches the edge of the view) and the
    trajectory stops. Each call starts a fresh, independent generator.

    Parameters
    ----------
    start : State or tuple of float
        Initial (x, y).
    control : float
        Control input for the field.
    variant : ModelVariant or str
        Which vector field to integrate.
    dt : float
        Step size.
    max_steps : int
        Maximum number of integration steps.
    bounds_check : callable, optional
        bounds_check(state) -> bool, True while the state is acceptable.
    method : str
        "rk4" (default) or "euler".

    Yields
    ------
    State
    """
    if method not in STEPPERS:
        raise ValueError(f"Unknown integration method '{method}'. "
                         f"Available: {list(STEPPERS)}")
    step = STEPPERS[method]
    variant = as_variant(variant)

    state = State(*start)
    yield state
    for _ in range(max_steps):
        state = step(state, control, variant, dt)
        yield state
        if bounds_check is not None and not bounds_check(state):
            return


def trajectory_from_config(start, control, variant, config, bounds_check=None):
    """Hover trajectory with the step size and step budget of a LabConfig.

    Uses config.trajectory_dt and config.trajectory_steps; see
    integrate_trajectory for the yielded states.
    """
    return integrate_trajectory(start, control, variant,
                                config.trajectory_dt, config.trajectory_steps,
                                bounds_check=bounds_check)
