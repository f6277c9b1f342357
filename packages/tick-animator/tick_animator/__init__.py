"""tick-animator - Spring and tween animation of numeric fields on host objects."""
from __future__ import annotations

from tick_animator.animator import Animator, AnimatorEvents
from tick_animator.components import FieldAnimation
from tick_animator.config import AnimatorConfig
from tick_animator.shape import as_path, iter_leaves, read_path, resolve_leaves, write_path
from tick_animator.types import (
    AnimationKind,
    FieldKey,
    FieldPath,
    MissingFieldError,
    NonNumericLeafError,
    ObjectHandle,
    ShapeError,
    StepResult,
    UntrackedObjectError,
)

__all__ = [
    "AnimationKind",
    "Animator",
    "AnimatorConfig",
    "AnimatorEvents",
    "FieldAnimation",
    "FieldKey",
    "FieldPath",
    "MissingFieldError",
    "NonNumericLeafError",
    "ObjectHandle",
    "ShapeError",
    "StepResult",
    "UntrackedObjectError",
    "as_path",
    "iter_leaves",
    "read_path",
    "resolve_leaves",
    "write_path",
]
