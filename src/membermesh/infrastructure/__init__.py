"""Infrastructure layer - file formats and export."""

from .exporters import (
    ExportManager,
    Exporter,
    ExporterRegistry,
    JsonMeshExporter,
    StlMemberExporter,
)
from .stl_exporter import StlExporter, StlMeshBuilder

__all__ = [
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonMeshExporter",
    "StlExporter",
    "StlMemberExporter",
    "StlMeshBuilder",
]
