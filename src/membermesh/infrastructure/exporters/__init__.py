"""Exporter framework for generated members.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- json: Member-local mesh buffers with placement transforms
- stl: Combined world-space STL for 3D viewing

Usage:
    from membermesh.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()
    manager = ExportManager(Path("output"))
    manager.export_all(["stl", "json"], batch_output, project_name="frame")
"""

from membermesh.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from membermesh.infrastructure.exporters.mesh_json import JsonMeshExporter
from membermesh.infrastructure.exporters.stl import StlMemberExporter

__all__ = [
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonMeshExporter",
    "StlMemberExporter",
]
