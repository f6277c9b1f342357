"""tick-tween - Time-based easing for the tick animator."""
from __future__ import annotations

from tick_tween.components import TweenState
from tick_tween.easing import (
    EASINGS,
    EasingFn,
    TweenStepFn,
    ease_in_out_step,
    ease_in_step,
    ease_out_step,
    linear_step,
    make_step,
)

__all__ = [
    "EASINGS",
    "EasingFn",
    "TweenState",
    "TweenStepFn",
    "ease_in_out_step",
    "ease_in_step",
    "ease_out_step",
    "linear_step",
    "make_step",
]
