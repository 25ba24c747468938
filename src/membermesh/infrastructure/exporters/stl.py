"""STL format exporter for generated members."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from membermesh.infrastructure.exporters.base import ExporterRegistry
from membermesh.infrastructure.stl_exporter import StlExporter, StlMeshBuilder

if TYPE_CHECKING:
    from membermesh.application.dtos import BatchOutput


@ExporterRegistry.register("stl")
class StlMemberExporter:
    """Exports all generated members, placed in world space, to one STL file.

    Attributes:
        format_name: "stl"
        file_extension: "stl"
    """

    format_name: ClassVar[str] = "stl"
    file_extension: ClassVar[str] = "stl"

    def __init__(self, mesh_builder: StlMeshBuilder | None = None, y_up: bool = False) -> None:
        """Initialize the STL exporter.

        Args:
            mesh_builder: Optional mesh builder for dependency injection.
            y_up: Swap Z-up world coordinates to Y-up when no builder is given.
        """
        self._exporter = StlExporter(mesh_builder=mesh_builder or StlMeshBuilder(y_up=y_up))

    def export(self, output: BatchOutput, path: Path) -> None:
        self._exporter.export_to_file(output.members, filepath=path)

    def export_string(self, output: BatchOutput) -> str:
        """STL output is binary and has no string form.

        Raises:
            NotImplementedError: Always.
        """
        raise NotImplementedError("STL format does not support string export (binary format)")
