"""tick-spring - Closed-form damped spring integration."""
from __future__ import annotations

from tick_spring.integrator import SpringState, step_spring
from tick_spring.params import (
    PhysicsParameters,
    SpringParameters,
    exponential,
    get_physics_parameters,
    is_finite,
    underdamped,
)

__all__ = [
    "PhysicsParameters",
    "SpringParameters",
    "SpringState",
    "exponential",
    "get_physics_parameters",
    "is_finite",
    "step_spring",
    "underdamped",
]
