"""Animated host objects for the spring gallery."""
from dataclasses import dataclass, field

from tick_rotation import IDENTITY


@dataclass
class Orb:
    """A lane orb. progress runs 0 (left rail end) -> 1 (right rail end)."""

    progress: float = 0.0
    glow: float = 0.0  # flashes to 1 on arrival, then fades out
    lane: int = 0


@dataclass
class Follower:
    """Sandbox orb chasing the last click; pos is a tuple, rebuilt on write."""

    pos: tuple = (0.0, 0.0)
    color: list = field(default_factory=lambda: [255.0, 255.0, 255.0])


@dataclass
class Pointer:
    """Sandbox arrow; rotation is an (x, y, z, w) quaternion."""

    rotation: tuple = IDENTITY
