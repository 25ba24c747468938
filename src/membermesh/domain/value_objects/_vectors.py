"""Vector, point and rotation value objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2:
    """2D point in section-local coordinates (mm).

    x runs across the section width, y runs up the section depth.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector in world space (mm)."""

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


# Points and vectors share one representation.
Point3 = Vector3

X_AXIS = Vector3(1.0, 0.0, 0.0)
Y_AXIS = Vector3(0.0, 1.0, 0.0)
Z_AXIS = Vector3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Quaternion:
    """Unit quaternion describing a rotation (x, y, z vector part, w scalar)."""

    x: float
    y: float
    z: float
    w: float

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(0.0, 0.0, 0.0, 1.0)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)


@dataclass(frozen=True)
class Basis:
    """Orthonormal right-handed frame of a placed member.

    Attributes:
        x_axis: Section width direction.
        y_axis: Section depth direction ("up" of the section).
        z_axis: Member axis, from start to end.
    """

    x_axis: Vector3
    y_axis: Vector3
    z_axis: Vector3

    @classmethod
    def canonical(cls) -> Basis:
        return cls(X_AXIS, Y_AXIS, Z_AXIS)
