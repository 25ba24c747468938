"""Exporter protocol, format registry and multi-format export manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from membermesh.application.dtos import BatchOutput


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """A writer for one output format.

    An exporter receives the whole ``BatchOutput``: generated members and
    the members that were skipped. Formats that cannot represent skips
    (STL) simply ignore them.

    Attributes:
        format_name: Name the format is registered under ("stl", "json").
        file_extension: Extension of written files, without the dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, output: BatchOutput, path: Path) -> None:
        """Write the batch to ``path``."""
        ...

    def export_string(self, output: BatchOutput) -> str:
        """Render the batch as text.

        Raises:
            NotImplementedError: For binary formats.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Format name to exporter class lookup.

    Exporter modules register their class at import time:

        @ExporterRegistry.register("json")
        class JsonMeshExporter:
            format_name = "json"
            file_extension = "json"
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Class decorator registering an exporter under ``format_name``."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            previous = cls._exporters.get(format_name)
            if previous is not None and previous is not exporter_class:
                logger.warning(
                    "Exporter %s replaces %s for format '%s'",
                    exporter_class.__name__,
                    previous.__name__,
                    format_name,
                )
            cls._exporters[format_name] = exporter_class
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Look up the exporter class for ``format_name``.

        Raises:
            KeyError: If nothing is registered under that name.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            known = ", ".join(cls.available_formats()) or "none"
            raise KeyError(
                f"No exporter registered for format '{format_name}'. Available formats: {known}"
            ) from None

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Writes one file per requested format for a batch of members.

    Every exporter is resolved before the first file is written, so an
    unknown format leaves the output directory untouched.

    Attributes:
        output_dir: Target directory, created on first export.
        exporter_options: Constructor keyword arguments keyed by format name,
            e.g. ``{"stl": {"y_up": True}}``.
    """

    def __init__(
        self, output_dir: Path, exporter_options: dict[str, dict[str, Any]] | None = None
    ) -> None:
        self.output_dir = Path(output_dir)
        self.exporter_options = exporter_options or {}

    def output_path(self, format_name: str, extension: str, project_name: str) -> Path:
        """Path of the file written for one format."""
        return self.output_dir / f"{project_name}_{format_name}.{extension}"

    def export_all(
        self,
        formats: list[str],
        output: BatchOutput,
        project_name: str = "members",
    ) -> dict[str, Path]:
        """Export the batch in every requested format.

        Args:
            formats: Registered format names.
            output: Generated and skipped members.
            project_name: Stem of the written file names.

        Returns:
            Written file path per format name.

        Raises:
            KeyError: If a format is not registered.
            OSError: If a file cannot be written.
        """
        exporters = [
            (name, ExporterRegistry.get(name)(**self.exporter_options.get(name, {})))
            for name in formats
        ]
        if output.skipped:
            logger.warning(
                "Exporting %d members; %d skipped members have no geometry",
                len(output.members),
                len(output.skipped),
            )

        self.output_dir.mkdir(parents=True, exist_ok=True)
        written: dict[str, Path] = {}
        for name, exporter in exporters:
            path = self.output_path(name, exporter.file_extension, project_name)
            exporter.export(output, path)
            logger.info("Wrote %s output: %s", name, path)
            written[name] = path
        return written
