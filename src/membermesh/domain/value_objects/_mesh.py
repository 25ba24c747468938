"""Triangle mesh buffers produced for a member."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from ..exceptions import ContractViolation

if TYPE_CHECKING:
    from ._vectors import Point3, Quaternion

# Decimal places positions are rounded to before welding; coordinates equal
# after rounding are treated as the same point.
WELD_DECIMALS = 6


def _empty(columns: int, dtype: type) -> np.ndarray:
    return np.zeros((0, columns), dtype=dtype)


@dataclass(frozen=True, eq=False)
class MeshBuffers:
    """Indexed triangle mesh.

    Attributes:
        positions: (N, 3) float array of vertex positions.
        indices: (M, 3) int array of counter-clockwise triangles (outward normals).
        uvs: (N, 2) float array of texture coordinates.
        normals: (N, 3) float array of unit vertex normals.
    """

    positions: np.ndarray = field(default_factory=lambda: _empty(3, np.float64))
    indices: np.ndarray = field(default_factory=lambda: _empty(3, np.int64))
    uvs: np.ndarray = field(default_factory=lambda: _empty(2, np.float64))
    normals: np.ndarray = field(default_factory=lambda: _empty(3, np.float64))

    def __post_init__(self) -> None:
        positions = np.asarray(self.positions, dtype=np.float64).reshape(-1, 3)
        indices = np.asarray(self.indices, dtype=np.int64).reshape(-1, 3)
        uvs = np.asarray(self.uvs, dtype=np.float64).reshape(-1, 2)
        normals = np.asarray(self.normals, dtype=np.float64).reshape(-1, 3)
        if len(uvs) != len(positions) or len(normals) != len(positions):
            raise ContractViolation("positions, uvs and normals must have one row per vertex")
        if indices.size and (indices.min() < 0 or indices.max() >= len(positions)):
            raise ContractViolation("triangle index out of range")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "indices", indices)
        object.__setattr__(self, "uvs", uvs)
        object.__setattr__(self, "normals", normals)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    def flat_positions(self) -> np.ndarray:
        """Positions as a flat ``[x0, y0, z0, x1, ...]`` array."""
        return self.positions.reshape(-1).copy()

    def flat_indices(self) -> np.ndarray:
        return self.indices.reshape(-1).copy()

    def flat_uvs(self) -> np.ndarray:
        return self.uvs.reshape(-1).copy()

    def flat_normals(self) -> np.ndarray:
        return self.normals.reshape(-1).copy()

    def triangle_vertices(self) -> np.ndarray:
        """Return an (M, 3, 3) array with the corner positions of every triangle."""
        return self.positions[self.indices]

    def transformed(self, center: Point3, rotation: Quaternion) -> MeshBuffers:
        """Return a copy rotated by ``rotation`` then translated to ``center``."""
        from ..vector_math import quaternion_to_matrix

        matrix = quaternion_to_matrix(rotation)
        offset = np.array([center.x, center.y, center.z], dtype=np.float64)
        return MeshBuffers(
            positions=self.positions @ matrix.T + offset,
            indices=self.indices.copy(),
            uvs=self.uvs.copy(),
            normals=self.normals @ matrix.T,
        )

    def _welded_indices(self) -> np.ndarray:
        if not self.vertex_count:
            return self.indices
        rounded = np.round(self.positions, WELD_DECIMALS) + 0.0
        _, inverse = np.unique(rounded, axis=0, return_inverse=True)
        return inverse.reshape(-1)[self.indices]

    def _directed_edges(self) -> Counter[tuple[int, int]]:
        tris = self._welded_indices()
        edges: Counter[tuple[int, int]] = Counter()
        for a, b, c in tris.tolist():
            edges[(a, b)] += 1
            edges[(b, c)] += 1
            edges[(c, a)] += 1
        return edges

    def boundary_edge_count(self) -> int:
        """Count undirected edges (after welding) used by exactly one triangle."""
        undirected: Counter[tuple[int, int]] = Counter()
        for (a, b), count in self._directed_edges().items():
            undirected[(min(a, b), max(a, b))] += count
        return sum(1 for count in undirected.values() if count == 1)

    def is_watertight(self) -> bool:
        """Check that the welded mesh is closed and consistently wound.

        Every directed edge must appear exactly once and its reverse must also
        appear exactly once.
        """
        if not self.triangle_count:
            return False
        edges = self._directed_edges()
        for (a, b), count in edges.items():
            if count != 1 or edges.get((b, a), 0) != 1:
                return False
        return True

    def volume(self) -> float:
        """Signed enclosed volume; positive for outward-wound closed meshes."""
        if not self.triangle_count:
            return 0.0
        tri = self.triangle_vertices()
        return float(np.einsum("ij,ij->i", tri[:, 0], np.cross(tri[:, 1], tri[:, 2])).sum() / 6.0)

    def surface_area(self) -> float:
        if not self.triangle_count:
            return 0.0
        tri = self.triangle_vertices()
        cross = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        return float(np.linalg.norm(cross, axis=1).sum() / 2.0)
