"""tick-rotation - Orientation springs for quaternion fields."""
from __future__ import annotations

from tick_rotation.angles import angle_continuous, get_roll, set_roll
from tick_rotation.orientation import (
    OrientationAnimator,
    OrientationSpringState,
    OrientationVelocity,
    RotationConfig,
    RotationMode,
    step_cartesian,
    step_spherical,
)
from tick_rotation.quat import IDENTITY, Quat

__all__ = [
    "IDENTITY",
    "OrientationAnimator",
    "OrientationSpringState",
    "OrientationVelocity",
    "Quat",
    "RotationConfig",
    "RotationMode",
    "angle_continuous",
    "get_roll",
    "set_roll",
    "step_cartesian",
    "step_spherical",
]
