"""JSON exporter with renderer-ready mesh buffers and placement transforms.

Each member carries its member-local buffers (flat positions, indices, uvs
and normals) together with the center and rotation a renderer applies to
place it, so a consumer can upload the buffers unchanged.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from membermesh.domain.value_objects import PlacementResult, Vector3
from membermesh.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from membermesh.application.dtos import BatchOutput, MemberMeshOutput


logger = logging.getLogger(__name__)

# Current schema version for JSON mesh output
SCHEMA_VERSION = "1.0"


def _vector(v: Vector3) -> list[float]:
    return [v.x, v.y, v.z]


def _placement(placement: PlacementResult) -> dict[str, Any]:
    data: dict[str, Any] = {
        "center": _vector(placement.center),
        "length": placement.length,
        "direction": _vector(placement.direction),
        "rotation": list(placement.rotation.as_tuple()),
        "adjusted_start": _vector(placement.adjusted_start),
        "adjusted_end": _vector(placement.adjusted_end),
        "placement_mode": placement.placement_mode.value,
        "section_height": placement.section_height,
        "roll_angle": placement.roll_angle,
        "is_degenerate": placement.is_degenerate,
    }
    if placement.basis is not None:
        data["basis"] = {
            "x_axis": _vector(placement.basis.x_axis),
            "y_axis": _vector(placement.basis.y_axis),
            "z_axis": _vector(placement.basis.z_axis),
        }
    return data


@ExporterRegistry.register("json")
class JsonMeshExporter:
    """Exports generated members as JSON mesh buffers.

    Attributes:
        format_name: "json"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int | None = 2, include_normals: bool = True) -> None:
        """Initialize the JSON exporter.

        Args:
            indent: JSON indentation; None writes compact output.
            include_normals: Include per-vertex normals in the buffers.
        """
        self.indent = indent
        self.include_normals = include_normals

    def _member(self, member: MemberMeshOutput) -> dict[str, Any]:
        mesh = member.mesh
        buffers: dict[str, Any] = {
            "vertex_count": mesh.vertex_count,
            "triangle_count": mesh.triangle_count,
            "positions": mesh.flat_positions().tolist(),
            "indices": mesh.flat_indices().tolist(),
            "uvs": mesh.flat_uvs().tolist(),
        }
        if self.include_normals:
            buffers["normals"] = mesh.flat_normals().tolist()
        return {
            "id": member.member_id,
            "placement": _placement(member.placement),
            "boundaries": [
                {
                    "position": b.position,
                    "vertex_count": b.profile.vertex_count,
                    "hole_count": len(b.profile.holes),
                }
                for b in member.boundaries
            ],
            "mesh": buffers,
        }

    def build(self, output: BatchOutput) -> dict[str, Any]:
        """Build the JSON-serializable document for a batch."""
        return {
            "schema_version": SCHEMA_VERSION,
            "members": [self._member(m) for m in output.members],
            "skipped": [{"id": s.member_id, "reason": s.reason} for s in output.skipped],
        }

    def export(self, output: BatchOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.debug("Wrote %d members to %s", len(output.members), path)

    def export_string(self, output: BatchOutput) -> str:
        return json.dumps(self.build(output), indent=self.indent)
