"""STL export functionality using numpy-stl."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np
from stl import mesh

from membermesh.application.dtos import MemberMeshOutput
from membermesh.domain import MeshBuffers

logger = logging.getLogger(__name__)


class StlMeshBuilder:
    """Builds numpy-stl meshes from member mesh buffers.

    Coordinate System Transformation:
    Members are placed in Z-up world coordinates, common in structural
    models. Many STL viewers expect Y-up, so the builder can swap axes:
    - x' = x
    - y' = z (world height becomes viewer vertical)
    - z' = y

    The swap mirrors the geometry, so triangle winding is reversed with it to
    keep normals pointing outward.
    """

    def __init__(self, y_up: bool = False) -> None:
        self.y_up = y_up

    def build_mesh(self, buffers: MeshBuffers) -> mesh.Mesh:
        """Create an STL mesh from indexed buffers.

        Args:
            buffers: Triangle mesh to convert.

        Returns:
            A numpy-stl Mesh object with one facet per triangle.
        """
        vectors = buffers.triangle_vertices()
        if self.y_up:
            vectors = vectors[:, ::-1][:, :, [0, 2, 1]]

        stl_mesh = mesh.Mesh(np.zeros(len(vectors), dtype=mesh.Mesh.dtype))
        if len(vectors):
            stl_mesh.vectors[:] = vectors
            stl_mesh.update_normals()
        return stl_mesh

    def build_member_mesh(self, output: MemberMeshOutput, world: bool = True) -> mesh.Mesh:
        """Create an STL mesh for a generated member.

        Args:
            output: Generated member.
            world: Place the member in world coordinates; otherwise keep the
                member-local frame (axis along z, centered on the origin).
        """
        buffers = output.world_mesh() if world else output.mesh
        return self.build_mesh(buffers)

    def combine_meshes(self, meshes: Sequence[mesh.Mesh]) -> mesh.Mesh:
        """Combine multiple meshes into a single mesh.

        Args:
            meshes: Meshes to combine.

        Returns:
            A single combined mesh containing all faces.
        """
        if not meshes:
            return mesh.Mesh(np.zeros(0, dtype=mesh.Mesh.dtype))
        return mesh.Mesh(np.concatenate([m.data for m in meshes]))


class StlExporter:
    """Exports generated members to STL.

    Every member is placed in world coordinates and all of them are written
    to a single STL file.
    """

    def __init__(self, mesh_builder: StlMeshBuilder | None = None) -> None:
        self.mesh_builder = mesh_builder or StlMeshBuilder()

    def export(self, outputs: Sequence[MemberMeshOutput], world: bool = True) -> mesh.Mesh:
        """Convert generated members into one combined STL mesh."""
        meshes = [self.mesh_builder.build_member_mesh(o, world=world) for o in outputs]
        return self.mesh_builder.combine_meshes(meshes)

    def export_to_file(
        self,
        outputs: Sequence[MemberMeshOutput],
        filepath: Path | str,
        world: bool = True,
    ) -> None:
        """Write generated members to an STL file.

        Args:
            outputs: Generated members.
            filepath: Path where the STL file will be saved.
            world: Place members in world coordinates.
        """
        combined = self.export(outputs, world=world)
        combined.save(str(filepath))
        logger.debug("Wrote %d facets to %s", len(combined.vectors), filepath)
