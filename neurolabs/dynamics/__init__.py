"""dynamics: Planar vector fields and fixed-step integration.

Continuous-time labs sample a field on a grid to draw flow vectors, and
trace trajectories with RK4 on demand (e.g. from a hovered point).
"""

from .fields import (
    State,
    Derivative,
    ModelVariant,
    VARIANT_CONSTANTS,
    as_variant,
    variant_constants,
    derivative,
    evaluate_field,
)
from .integrator import (
    rk4_step,
    euler_step,
    bounded_box,
    integrate_trajectory,
    trajectory_from_config,
)
from .phase import (
    default_ranges,
    field_grid,
    fixed_point,
)
