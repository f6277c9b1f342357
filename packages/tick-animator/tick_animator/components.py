"""Per-field animation records."""
from __future__ import annotations

from dataclasses import dataclass

from tick_spring import PhysicsParameters
from tick_tween import TweenState

from tick_animator.types import AnimationKind


@dataclass
class FieldAnimation:
    """Live animation of one numeric field of a tracked host object.

    Springs carry velocity across retargets. Tweens recompute their value
    from `tween` each step; their velocity is reconstructed for
    introspection only.
    """

    target: float
    kind: AnimationKind
    spring_params: PhysicsParameters | None = None
    tween: TweenState | None = None
    velocity: float = 0.0
    elapsed_s: float = 0.0
