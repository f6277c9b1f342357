"""Animator configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _default_spring() -> Mapping[str, Any]:
    return {"duration_s": 0.5}


@dataclass(frozen=True)
class AnimatorConfig:
    """Immutable tuning for an Animator.

    Attributes:
        completion_epsilon: A spring completes once both |x - target| and |v|
            fall below this value.
        max_duration_s: Stepped time after which a still-running animation is
            snapped to its target and completed. None disables the cutoff.
        default_spring: Spring parameters used when spring_to is called
            without explicit parameters.
        default_tween_duration_s: Duration used by tween helpers called
            without an explicit duration.
        first_tick_dt_s: Time step assumed by the first tick() call.
    """

    completion_epsilon: float = 1e-4
    max_duration_s: float | None = None
    default_spring: Mapping[str, Any] = field(default_factory=_default_spring)
    default_tween_duration_s: float = 0.5
    first_tick_dt_s: float = 1 / 60

    def __post_init__(self) -> None:
        if self.completion_epsilon <= 0:
            raise ValueError("completion_epsilon must be positive")
        if self.max_duration_s is not None and self.max_duration_s <= 0:
            raise ValueError("max_duration_s must be positive or None")
        if self.first_tick_dt_s <= 0:
            raise ValueError("first_tick_dt_s must be positive")
