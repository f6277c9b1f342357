"""Mapping from duration/bounce descriptors to oscillator coefficients."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Union

# 2u where (1 + u) * exp(-u) = 0.001: a critically damped spring released
# from rest is within 0.1% of its target after `duration_s`.
POINT_ONE_PERCENT_CONSTANT = 18.46682

# 2u where (1 + u) * exp(-u) = 0.5 (half-way point from rest).
HALF_LIFE_CONSTANT = 3.356694


@dataclass(frozen=True, slots=True)
class PhysicsParameters:
    """Spring constant and damping coefficient.

    Non-finite values are a sentinel for "snap to target instantly".
    """

    strength: float
    damping: float


SpringParameters = Union[PhysicsParameters, Mapping[str, float]]


def _check_duration(duration_s: float) -> None:
    if not math.isfinite(duration_s) or duration_s < 0:
        raise ValueError(f"duration_s must be finite and >= 0, got {duration_s}")


def exponential(duration_s: float) -> PhysicsParameters:
    """Critically damped coefficients reaching 0.1% of the target at `duration_s`.

    `damping = 18.46682 / duration_s`, `strength = damping**2 / 4`. A zero
    duration yields infinite coefficients, which snap to the target.
    """
    _check_duration(duration_s)
    if duration_s == 0:
        return PhysicsParameters(strength=math.inf, damping=math.inf)
    damping = POINT_ONE_PERCENT_CONSTANT / duration_s
    strength = damping * damping / 4
    return PhysicsParameters(strength=strength, damping=damping)


def underdamped(duration_s: float, bounce: float) -> PhysicsParameters:
    """Coefficients that overshoot and oscillate while decaying.

    Damping matches `exponential` so the decay envelope still settles over
    `duration_s`; `bounce` is roughly the number of oscillations before
    settling. `bounce = 0` gives the critically damped case.
    """
    _check_duration(duration_s)
    if duration_s == 0:
        return PhysicsParameters(strength=math.inf, damping=math.inf)
    damping = POINT_ONE_PERCENT_CONSTANT / duration_s
    strength = 0.25 * ((2 * bounce * math.pi / duration_s) ** 2 + damping**2)
    return PhysicsParameters(strength=strength, damping=damping)


def get_physics_parameters(params: SpringParameters) -> PhysicsParameters:
    """Resolve any accepted descriptor to a PhysicsParameters pair."""
    if isinstance(params, PhysicsParameters):
        return params
    if not isinstance(params, Mapping):
        raise TypeError(
            f"Expected PhysicsParameters or a mapping, got {type(params).__name__}"
        )
    if "bounce" in params:
        return underdamped(params["duration_s"], params["bounce"])
    if "duration_s" in params:
        return exponential(params["duration_s"])
    if "strength" in params and "damping" in params:
        return PhysicsParameters(
            strength=params["strength"], damping=params["damping"]
        )
    raise ValueError(
        "Spring parameters need 'duration_s' (optionally with 'bounce') "
        f"or 'strength' and 'damping', got keys {sorted(params)}"
    )


def is_finite(params: PhysicsParameters | None) -> bool:
    if params is None:
        return False
    return math.isfinite(params.strength) and math.isfinite(params.damping)
