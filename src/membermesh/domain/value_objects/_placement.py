"""Placement value objects: datum modes, end offsets and placement results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._vectors import Basis, Point3, Quaternion, Vector3


class PlacementMode(str, Enum):
    """Which part of the section passes through the member's reference points."""

    CENTER = "center"
    TOP_ALIGNED = "top-aligned"


@dataclass(frozen=True)
class EndOffsets:
    """World-space offsets applied to the member endpoints before placement."""

    start: Vector3 = field(default_factory=Vector3.zero)
    end: Vector3 = field(default_factory=Vector3.zero)


@dataclass(frozen=True)
class PlacementResult:
    """World transform of a member mesh.

    The mesh is built along local z and centered on the origin; rotating it by
    ``rotation`` and translating it by ``center`` places it in the world.

    Attributes:
        center: Midpoint of the adjusted endpoints.
        length: Distance between the adjusted endpoints.
        direction: Unit vector from adjusted start to adjusted end.
        rotation: Rotation taking local axes to world axes.
        adjusted_start: Start point after offsets and datum shift.
        adjusted_end: End point after offsets and datum shift.
        basis: Member frame for beam placements, None for axial placements.
        is_degenerate: True when the adjusted endpoints nearly coincide.
        placement_mode: Datum used to compute the result.
        section_height: Section depth used by the top-aligned datum.
        roll_angle: Roll about the member axis in radians.
    """

    center: Point3
    length: float
    direction: Vector3
    rotation: Quaternion
    adjusted_start: Point3
    adjusted_end: Point3
    basis: Basis | None = None
    is_degenerate: bool = False
    placement_mode: PlacementMode = PlacementMode.CENTER
    section_height: float = 0.0
    roll_angle: float = 0.0
