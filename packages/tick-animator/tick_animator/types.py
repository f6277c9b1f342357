"""Shared type aliases and errors for the animator."""
from __future__ import annotations

from enum import Enum
from typing import Union

ObjectHandle = int

FieldKey = Union[str, int]
FieldPath = tuple[FieldKey, ...]


class AnimationKind(Enum):
    SPRING = "spring"
    TWEEN = "tween"


class StepResult(Enum):
    CONTINUE = 0
    COMPLETE = 1


class UntrackedObjectError(KeyError):
    """Raised when a handle does not refer to a tracked host object."""

    def __init__(self, handle: int, message: str) -> None:
        self.handle = handle
        super().__init__(message)


class ShapeError(Exception):
    """A target shape does not match its host object."""

    def __init__(self, path: FieldPath, message: str) -> None:
        self.path = path
        super().__init__(message)


class MissingFieldError(ShapeError, KeyError):
    """The host has no field at a path named by the target shape."""


class NonNumericLeafError(ShapeError, TypeError):
    """A target leaf, or the host value it animates, is not a number."""
