"""Closed triangle meshes for members whose section varies along the axis.

The member runs along local z, centered on the origin: a boundary at
position 0 sits at ``z = -length/2`` and one at ``length`` at ``+length/2``.
Adjacent boundaries are joined by interpolated rings of vertices; each ring
is shared by the segments on either side of it, so the lateral walls are
closed by construction. End caps get their own vertices so that their flat
normals do not bleed into the walls.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from ..exceptions import ContractViolation
from ..value_objects import (
    CrossSectionProfile,
    MeshBuffers,
    Point2,
    SegmentBoundary,
)
from .triangulation import triangulate_cap

logger = logging.getLogger(__name__)


def _compatibility_error(
    start: CrossSectionProfile, end: CrossSectionProfile
) -> str | None:
    if start.vertex_count != end.vertex_count:
        return (
            f"Vertex count mismatch (start: {start.vertex_count}, end: {end.vertex_count})"
        )
    if len(start.holes) != len(end.holes):
        return f"Hole count mismatch (start: {len(start.holes)}, end: {len(end.holes)})"
    for i, (a, b) in enumerate(zip(start.holes, end.holes)):
        if len(a) != len(b):
            return f"Hole {i} vertex count mismatch (start: {len(a)}, end: {len(b)})"
    return None


def _lerp_loop(
    start: Sequence[Point2], end: Sequence[Point2], t: float
) -> tuple[Point2, ...]:
    return tuple(
        Point2(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y)) for a, b in zip(start, end)
    )


def interpolate_profiles(
    start: CrossSectionProfile, end: CrossSectionProfile, t: float
) -> CrossSectionProfile:
    """Linearly interpolate two compatible profiles vertex-for-vertex.

    Args:
        start: Profile at ``t = 0``.
        end: Profile at ``t = 1``.
        t: Interpolation parameter.

    Returns:
        Interpolated profile, holes included.

    Raises:
        ContractViolation: If the profiles differ in vertex or hole counts.
    """
    error = _compatibility_error(start, end)
    if error:
        raise ContractViolation(error)
    if start == end:
        return start
    return CrossSectionProfile(
        outer=_lerp_loop(start.outer, end.outer, t),
        holes=tuple(_lerp_loop(a, b, t) for a, b in zip(start.holes, end.holes)),
    )


def generate_intermediate_profiles(
    start: CrossSectionProfile, end: CrossSectionProfile, divisions: int
) -> list[CrossSectionProfile]:
    """Return ``divisions + 1`` evenly spaced profiles, both ends included."""
    if divisions < 1:
        raise ContractViolation(f"divisions must be at least 1 (got {divisions})")
    return [interpolate_profiles(start, end, i / divisions) for i in range(divisions + 1)]


class TaperedMeshBuilder:
    """Builds closed member meshes from ordered segment boundaries.

    Segments between two different profiles are split into ``subdivisions``
    interpolation steps. Segments with identical profiles at both ends are
    straight prisms and are never subdivided.
    """

    def __init__(self, subdivisions: int = 1) -> None:
        if subdivisions < 1:
            raise ContractViolation(f"subdivisions must be at least 1 (got {subdivisions})")
        self.subdivisions = subdivisions

    def _validate(self, boundaries: Sequence[SegmentBoundary], length: float) -> None:
        if len(boundaries) < 2:
            raise ContractViolation(
                f"At least 2 segment boundaries are required (got {len(boundaries)})"
            )
        if not math.isfinite(length) or length <= 0:
            raise ContractViolation(f"Member length must be positive (got {length})")
        for i, (a, b) in enumerate(zip(boundaries, boundaries[1:])):
            if b.position < a.position:
                raise ContractViolation(
                    f"Boundaries must be ascending (boundary {i + 1} at {b.position} "
                    f"follows {a.position})"
                )
            error = _compatibility_error(a.profile, b.profile)
            if error:
                raise ContractViolation(f"Boundaries {i} and {i + 1}: {error}")

    def _rings(
        self, boundaries: Sequence[SegmentBoundary]
    ) -> list[tuple[float, CrossSectionProfile]]:
        """Interpolated (position, profile) rings; each boundary appears once."""
        first = boundaries[0]
        rings = [(first.position, first.profile.oriented())]
        for a, b in zip(boundaries, boundaries[1:]):
            start = a.profile.oriented()
            end = b.profile.oriented()
            steps = 1 if start == end else self.subdivisions
            for step in range(1, steps + 1):
                t = step / steps
                position = a.position + t * (b.position - a.position)
                rings.append((position, interpolate_profiles(start, end, t)))
        return rings

    def build(self, boundaries: Sequence[SegmentBoundary], length: float) -> MeshBuffers:
        """Build the closed mesh for a member.

        Args:
            boundaries: At least two boundaries in ascending position order
                spanning the member from 0 to ``length``.
            length: Member length in mm.

        Returns:
            Mesh buffers in member-local coordinates.

        Raises:
            ContractViolation: If the boundaries cannot describe a closed
                member (too few, unordered, or with incompatible profiles).
        """
        self._validate(boundaries, length)
        rings = self._rings(boundaries)
        half = length / 2.0

        reference = rings[0][1]
        loop_sizes = [len(loop) for loop in reference.loops()]
        ring_size = sum(loop_sizes)

        positions: list[tuple[float, float, float]] = []
        uvs: list[tuple[float, float]] = []
        for position, profile in rings:
            z = position - half
            v = position / length
            for loop in profile.loops():
                size = len(loop)
                for j, p in enumerate(loop):
                    positions.append((p.x, p.y, z))
                    uvs.append((j / size, v))

        triangles: list[tuple[int, int, int]] = []
        for r in range(len(rings) - 1):
            base = r * ring_size
            above = base + ring_size
            offset = 0
            for size in loop_sizes:
                for j in range(size):
                    cur = base + offset + j
                    nxt = base + offset + (j + 1) % size
                    cur_next = above + offset + j
                    nxt_next = above + offset + (j + 1) % size
                    triangles.append((cur, nxt, cur_next))
                    triangles.append((nxt, nxt_next, cur_next))
                offset += size

        wall_positions = np.array(positions, dtype=np.float64)
        wall_uvs = np.array(uvs, dtype=np.float64)
        wall_indices = np.array(triangles, dtype=np.int64).reshape(-1, 3)

        first_position, first_profile = rings[0]
        last_position, last_profile = rings[-1]
        start_vertices, start_indices = triangulate_cap(
            first_profile, first_position - half, base_index=len(wall_positions), reverse=True
        )
        end_vertices, end_indices = triangulate_cap(
            last_profile,
            last_position - half,
            base_index=len(wall_positions) + len(start_vertices),
            reverse=False,
        )

        all_positions = np.vstack([wall_positions, start_vertices, end_vertices])
        all_uvs = np.vstack([wall_uvs, wall_uvs[:ring_size], wall_uvs[-ring_size:]])
        all_indices = np.vstack([wall_indices, start_indices, end_indices])

        logger.debug(
            "Built member mesh: %d rings, %d vertices, %d triangles",
            len(rings),
            len(all_positions),
            len(all_indices),
        )
        return MeshBuffers(
            positions=all_positions,
            indices=all_indices,
            uvs=all_uvs,
            normals=compute_vertex_normals(all_positions, all_indices),
        )


def compute_vertex_normals(positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Area-weighted smooth vertex normals.

    Vertices that belong to no triangle, or only to zero-area triangles,
    get a zero normal.
    """
    normals = np.zeros_like(positions, dtype=np.float64)
    if len(indices):
        tri = positions[indices]
        face = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        for corner in range(3):
            np.add.at(normals, indices[:, corner], face)
    norms = np.linalg.norm(normals, axis=1, keepdims=True)
    return np.divide(normals, norms, out=np.zeros_like(normals), where=norms > 0)


def build_tapered_mesh(
    boundaries: Sequence[SegmentBoundary], length: float, subdivisions: int = 1
) -> MeshBuffers:
    """Build a member mesh from segment boundaries."""
    return TaperedMeshBuilder(subdivisions).build(boundaries, length)


def build_taper_mesh(
    start: CrossSectionProfile,
    end: CrossSectionProfile,
    length: float,
    subdivisions: int = 1,
) -> MeshBuffers:
    """Build a single linear taper from ``start`` at 0 to ``end`` at ``length``."""
    return build_tapered_mesh(
        [SegmentBoundary(0.0, start), SegmentBoundary(length, end)], length, subdivisions
    )


def build_prismatic_mesh(
    profile: CrossSectionProfile, length: float, subdivisions: int = 1
) -> MeshBuffers:
    """Build a straight prism of constant section."""
    return build_taper_mesh(profile, profile, length, subdivisions)
