"""Easing curves and closed-form tween step functions."""
from __future__ import annotations

from typing import Callable

EasingFn = Callable[[float], float]

# (start value, target value, normalized time u in [0, 1]) -> value
TweenStepFn = Callable[[float, float, float], float]


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t * t


def ease_out(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out(t: float) -> float:
    # Cubic smoothstep.
    return t * t * (3 - 2 * t)


EASINGS: dict[str, EasingFn] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": ease_in_out,
}


def make_step(easing: EasingFn) -> TweenStepFn:
    """Build a tween step function from a unit easing curve."""

    def step(x0: float, target: float, u: float) -> float:
        return x0 + (target - x0) * easing(u)

    step.__name__ = f"{easing.__name__}_step"
    return step


linear_step = make_step(linear)
ease_in_step = make_step(ease_in)
ease_out_step = make_step(ease_out)
ease_in_out_step = make_step(ease_in_out)
