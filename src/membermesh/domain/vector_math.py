"""Pure vector and quaternion helpers.

All functions take and return immutable value objects; nothing here keeps
state. Zero-length vectors normalize to the zero vector instead of raising.
"""

from __future__ import annotations

import math

import numpy as np

from .value_objects._vectors import X_AXIS, Y_AXIS, Basis, Quaternion, Vector3

# Cosine thresholds for treating two unit vectors as parallel or antiparallel.
PARALLEL_DOT = 0.999999


def add(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def scale(v: Vector3, factor: float) -> Vector3:
    return Vector3(v.x * factor, v.y * factor, v.z * factor)


def dot(a: Vector3, b: Vector3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def length(v: Vector3) -> float:
    return math.sqrt(dot(v, v))


def distance(a: Vector3, b: Vector3) -> float:
    return length(subtract(b, a))


def normalize(v: Vector3) -> Vector3:
    """Return ``v`` scaled to unit length, or the zero vector if ``v`` is zero."""
    norm = length(v)
    if norm == 0.0:
        return Vector3.zero()
    return Vector3(v.x / norm, v.y / norm, v.z / norm)


def midpoint(a: Vector3, b: Vector3) -> Vector3:
    return Vector3((a.x + b.x) / 2.0, (a.y + b.y) / 2.0, (a.z + b.z) / 2.0)


def lerp(a: Vector3, b: Vector3, t: float) -> Vector3:
    """Linear interpolation; ``t=0`` gives ``a`` and ``t=1`` gives ``b``."""
    return Vector3(
        a.x + (b.x - a.x) * t,
        a.y + (b.y - a.y) * t,
        a.z + (b.z - a.z) * t,
    )


def quaternion_from_axis_angle(axis: Vector3, angle: float) -> Quaternion:
    """Rotation of ``angle`` radians about ``axis`` (normalized here)."""
    unit = normalize(axis)
    half = angle / 2.0
    s = math.sin(half)
    return Quaternion(unit.x * s, unit.y * s, unit.z * s, math.cos(half))


def normalize_quaternion(q: Quaternion) -> Quaternion:
    norm = math.sqrt(q.x * q.x + q.y * q.y + q.z * q.z + q.w * q.w)
    if norm == 0.0:
        return Quaternion.identity()
    return Quaternion(q.x / norm, q.y / norm, q.z / norm, q.w / norm)


def quaternion_from_unit_vectors(source: Vector3, target: Vector3) -> Quaternion:
    """Shortest-arc rotation taking unit vector ``source`` onto ``target``.

    Antiparallel inputs have no unique shortest arc; the rotation is then a
    half turn about an axis perpendicular to ``source``, taken from
    ``X x source`` or, when that is degenerate, ``Y x source``.
    """
    d = dot(source, target)
    if d > PARALLEL_DOT:
        return Quaternion.identity()
    if d < -PARALLEL_DOT:
        axis = cross(X_AXIS, source)
        if length(axis) < 1e-6:
            axis = cross(Y_AXIS, source)
        axis = normalize(axis)
        return Quaternion(axis.x, axis.y, axis.z, 0.0)
    c = cross(source, target)
    return normalize_quaternion(Quaternion(c.x, c.y, c.z, 1.0 + d))


def multiply_quaternions(a: Quaternion, b: Quaternion) -> Quaternion:
    """Hamilton product ``a * b``: applies ``b`` first, then ``a``."""
    return Quaternion(
        a.w * b.x + a.x * b.w + a.y * b.z - a.z * b.y,
        a.w * b.y - a.x * b.z + a.y * b.w + a.z * b.x,
        a.w * b.z + a.x * b.y - a.y * b.x + a.z * b.w,
        a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
    )


def quaternion_from_basis(basis: Basis) -> Quaternion:
    """Rotation whose matrix has the basis axes as columns.

    Uses the trace method. When the trace is not positive the quaternion is
    recovered from the largest diagonal element, which keeps the square root
    argument well away from zero.
    """
    x, y, z = basis.x_axis, basis.y_axis, basis.z_axis
    m00, m01, m02 = x.x, y.x, z.x
    m10, m11, m12 = x.y, y.y, z.y
    m20, m21, m22 = x.z, y.z, z.z

    trace = m00 + m11 + m22
    if trace > 0:
        s = 0.5 / math.sqrt(trace + 1.0)
        q = Quaternion((m21 - m12) * s, (m02 - m20) * s, (m10 - m01) * s, 0.25 / s)
    elif m00 > m11 and m00 > m22:
        s = 2.0 * math.sqrt(1.0 + m00 - m11 - m22)
        q = Quaternion(0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s)
    elif m11 > m22:
        s = 2.0 * math.sqrt(1.0 + m11 - m00 - m22)
        q = Quaternion((m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s)
    else:
        s = 2.0 * math.sqrt(1.0 + m22 - m00 - m11)
        q = Quaternion((m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s)
    return normalize_quaternion(q)


def rotate_vector(v: Vector3, q: Quaternion) -> Vector3:
    """Rotate ``v`` by unit quaternion ``q``."""
    u = Vector3(q.x, q.y, q.z)
    t = scale(cross(u, v), 2.0)
    return add(add(v, scale(t, q.w)), cross(u, t))


def rotate_vector_around_axis(v: Vector3, axis: Vector3, angle: float) -> Vector3:
    """Rodrigues rotation of ``v`` about unit ``axis`` by ``angle`` radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    k_dot_v = dot(axis, v)
    k_cross_v = cross(axis, v)
    return Vector3(
        v.x * cos_a + k_cross_v.x * sin_a + axis.x * k_dot_v * (1.0 - cos_a),
        v.y * cos_a + k_cross_v.y * sin_a + axis.y * k_dot_v * (1.0 - cos_a),
        v.z * cos_a + k_cross_v.z * sin_a + axis.z * k_dot_v * (1.0 - cos_a),
    )


def quaternion_to_matrix(q: Quaternion) -> np.ndarray:
    """Return the 3x3 rotation matrix of ``q`` (column vectors convention)."""
    x, y, z, w = q.x, q.y, q.z, q.w
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ],
        dtype=np.float64,
    )


def basis_from_quaternion(q: Quaternion) -> Basis:
    """Inverse of :func:`quaternion_from_basis`: rotate the canonical axes."""
    m = quaternion_to_matrix(q)
    return Basis(
        Vector3(*m[:, 0].tolist()),
        Vector3(*m[:, 1].tolist()),
        Vector3(*m[:, 2].tolist()),
    )
