"""3D vector math helpers operating on tuple[float, float, float]."""
from __future__ import annotations

import math

Vec3 = tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)
UNIT_Y: Vec3 = (0.0, 1.0, 0.0)
FORWARD: Vec3 = (0.0, 0.0, -1.0)


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Vec3, s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def magnitude_sq(v: Vec3) -> float:
    return dot(v, v)


def magnitude(v: Vec3) -> float:
    return math.sqrt(magnitude_sq(v))


def normalize(v: Vec3) -> Vec3:
    mag = magnitude(v)
    if mag == 0.0:
        return v
    return scale(v, 1.0 / mag)


def project_on_plane(v: Vec3, normal: Vec3) -> Vec3:
    """Remove the component of v along `normal` (which need not be unit length)."""
    denom = magnitude_sq(normal)
    if denom == 0.0:
        return v
    return sub(v, scale(normal, dot(v, normal) / denom))


def angle_to(a: Vec3, b: Vec3) -> float:
    """Unsigned angle between two vectors, in radians."""
    denom = math.sqrt(magnitude_sq(a) * magnitude_sq(b))
    if denom == 0.0:
        return math.pi / 2
    return math.acos(min(max(dot(a, b) / denom, -1.0), 1.0))
