"""Unit quaternion helpers.

Quaternions are (x, y, z, w) with w the scalar part. Rotation matrices are
handled as their three basis columns (x, y, z); an object "looks" along -z
and its up vector is +y.
"""
from __future__ import annotations

import math
from typing import NamedTuple, Sequence

from tick_rotation import vec
from tick_rotation.vec import Vec3


class Quat(NamedTuple):
    x: float
    y: float
    z: float
    w: float


IDENTITY = Quat(0.0, 0.0, 0.0, 1.0)


def as_quat(q: Sequence[float]) -> Quat:
    if isinstance(q, Quat):
        return q
    x, y, z, w = q
    return Quat(float(x), float(y), float(z), float(w))


def dot(a: Quat, b: Quat) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w


def length(q: Quat) -> float:
    return math.sqrt(dot(q, q))


def normalize(q: Quat) -> Quat:
    n = length(q)
    if n == 0.0:
        return IDENTITY
    return Quat(q.x / n, q.y / n, q.z / n, q.w / n)


def multiply(a: Quat, b: Quat) -> Quat:
    """Hamilton product a * b: rotate by b, then by a."""
    return Quat(
        a.x * b.w + a.w * b.x + a.y * b.z - a.z * b.y,
        a.y * b.w + a.w * b.y + a.z * b.x - a.x * b.z,
        a.z * b.w + a.w * b.z + a.x * b.y - a.y * b.x,
        a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
    )


def from_axis_angle(axis: Vec3, angle: float) -> Quat:
    """Rotation of `angle` radians about a unit `axis`."""
    s = math.sin(angle / 2)
    return Quat(axis[0] * s, axis[1] * s, axis[2] * s, math.cos(angle / 2))


def from_unit_vectors(v_from: Vec3, v_to: Vec3) -> Quat:
    """Shortest rotation taking unit vector v_from onto unit vector v_to."""
    r = vec.dot(v_from, v_to) + 1.0
    if r < 1e-12:
        # Opposite vectors: any perpendicular axis works.
        if abs(v_from[0]) > abs(v_from[2]):
            q = Quat(-v_from[1], v_from[0], 0.0, 0.0)
        else:
            q = Quat(0.0, -v_from[2], v_from[1], 0.0)
    else:
        cx, cy, cz = vec.cross(v_from, v_to)
        q = Quat(cx, cy, cz, r)
    return normalize(q)


def rotate(q: Quat, v: Vec3) -> Vec3:
    """Apply the rotation q to vector v."""
    tx = 2 * (q.y * v[2] - q.z * v[1])
    ty = 2 * (q.z * v[0] - q.x * v[2])
    tz = 2 * (q.x * v[1] - q.y * v[0])
    return (
        v[0] + q.w * tx + q.y * tz - q.z * ty,
        v[1] + q.w * ty + q.z * tx - q.x * tz,
        v[2] + q.w * tz + q.x * ty - q.y * tx,
    )


def basis(q: Quat) -> tuple[Vec3, Vec3, Vec3]:
    """The x, y and z basis vectors of the rotation matrix of a unit quaternion."""
    x2, y2, z2 = q.x + q.x, q.y + q.y, q.z + q.z
    xx, xy, xz = q.x * x2, q.x * y2, q.x * z2
    yy, yz, zz = q.y * y2, q.y * z2, q.z * z2
    wx, wy, wz = q.w * x2, q.w * y2, q.w * z2
    return (
        (1 - (yy + zz), xy + wz, xz - wy),
        (xy - wz, 1 - (xx + zz), yz + wx),
        (xz + wy, yz - wx, 1 - (xx + yy)),
    )


def from_basis(x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> Quat:
    """Quaternion of the rotation matrix with the given orthonormal columns."""
    m11, m21, m31 = x_axis
    m12, m22, m32 = y_axis
    m13, m23, m33 = z_axis
    trace = m11 + m22 + m33

    if trace > 0:
        s = 0.5 / math.sqrt(trace + 1.0)
        return Quat((m32 - m23) * s, (m13 - m31) * s, (m21 - m12) * s, 0.25 / s)
    if m11 > m22 and m11 > m33:
        s = 2.0 * math.sqrt(1.0 + m11 - m22 - m33)
        return Quat(0.25 * s, (m12 + m21) / s, (m13 + m31) / s, (m32 - m23) / s)
    if m22 > m33:
        s = 2.0 * math.sqrt(1.0 + m22 - m11 - m33)
        return Quat((m12 + m21) / s, 0.25 * s, (m23 + m32) / s, (m13 - m31) / s)
    s = 2.0 * math.sqrt(1.0 + m33 - m11 - m22)
    return Quat((m13 + m31) / s, (m23 + m32) / s, 0.25 * s, (m21 - m12) / s)


def align_to_direction(q: Quat, direction: Vec3) -> Quat:
    """Rotate q minimally so its z basis points along `direction`.

    The x and y axes are re-orthogonalized against the new z axis, keeping
    the current up vector where possible.
    """
    x_axis, y_axis, _ = basis(q)
    z_axis = vec.normalize(direction)
    new_x = vec.cross(y_axis, z_axis)
    if vec.magnitude_sq(new_x) < 1e-12:
        # Direction is along the current up vector; fall back to the x axis.
        new_x = vec.project_on_plane(x_axis, z_axis)
    new_x = vec.normalize(new_x)
    new_y = vec.normalize(vec.cross(z_axis, new_x))
    return from_basis(new_x, new_y, z_axis)
