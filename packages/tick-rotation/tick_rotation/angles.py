"""Angle helpers for spherical orientation springs."""
from __future__ import annotations

import math

from tick_rotation import quat, vec
from tick_rotation.quat import Quat

TAU = 2 * math.pi


def fract(x: float) -> float:
    return x - math.floor(x)


def angle_continuous(angle: float, last_angle: float) -> float:
    """Return the representation of `angle` nearest to `last_angle`.

    `angle` is expected in [-pi, pi]; `last_angle` may be any unwrapped value.
    The result never differs from `last_angle` by more than pi.
    """
    u = angle / TAU + 0.5
    u_last = fract(last_angle / TAU + 0.5)
    du = u - u_last
    if abs(du) < 0.5:
        return last_angle + du * TAU
    # Wrapped through the seam.
    return last_angle - math.copysign(1.0 - abs(du), du) * TAU


def get_roll(q: Quat) -> float:
    """Signed angle between the object's up vector and world up, about its forward axis.

    Zero when the object looks straight up or down.
    """
    forward = quat.rotate(q, vec.FORWARD)
    up = vec.project_on_plane(quat.rotate(q, vec.UNIT_Y), forward)
    world_up = vec.project_on_plane(vec.UNIT_Y, forward)
    if vec.magnitude_sq(world_up) < 1e-12:
        return 0.0
    angle = vec.angle_to(world_up, up)
    if vec.dot(vec.cross(world_up, up), forward) < 0:
        angle = -angle
    return angle


def set_roll(q: Quat, roll: float) -> Quat:
    """Rotate q about its forward axis so that get_roll(result) == roll."""
    delta = roll - get_roll(q)
    forward = vec.normalize(quat.rotate(q, vec.FORWARD))
    return quat.multiply(quat.from_axis_angle(forward, delta), q)


def elevation_azimuth_roll(q: Quat) -> tuple[float, float, float]:
    """Spherical angles of the z basis of q, plus its roll."""
    _, _, z = quat.basis(q)
    azimuth = math.atan2(z[2], z[0])
    elevation = math.atan2(z[1], math.sqrt(z[0] * z[0] + z[2] * z[2]))
    return elevation, azimuth, get_roll(q)


def direction_from_angles(elevation: float, azimuth: float) -> vec.Vec3:
    cos_el = math.cos(elevation)
    return vec.normalize(
        (math.cos(azimuth) * cos_el, math.sin(elevation), math.sin(azimuth) * cos_el)
    )
