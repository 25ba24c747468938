"""The ``validate-settings`` command.

Loads a mesh settings file through the same loader ``generate`` uses and
prints either the effective settings or every problem found, grouped by the
kind of failure.
"""

from pathlib import Path
from typing import Annotated

import typer

from membermesh.application.config import ConfigError, MeshSettings, load_settings
from membermesh.application.config.schema import SUPPORTED_VERSIONS


def _error_lines(error: ConfigError) -> list[str]:
    """Human-readable lines describing a settings load failure."""
    if error.error_type == "file_not_found":
        return [f"File not found: {error.path}"]
    if error.error_type in ("permission_denied", "file_read_error"):
        return [error.message]
    if error.error_type == "json_parse":
        lines = ["Invalid JSON syntax"]
        for detail in error.details:
            lines.append(
                f"  Line {detail.get('line', '?')}, Column {detail.get('column', '?')}: "
                f"{detail.get('message', 'unknown error')}"
            )
        return lines
    if error.error_type == "validation":
        lines = []
        for detail in error.details:
            lines.append(f"{detail.get('path') or '(root)'}: {detail.get('message')}")
            if detail.get("value") is not None:
                lines.append(f"  Value: {detail['value']!r}")
        return lines
    return [error.message]


def _settings_lines(settings: MeshSettings) -> list[str]:
    meshing = settings.meshing
    output = settings.output
    return [
        f"Schema version:          {settings.schema_version}",
        f"Subdivisions:            {meshing.subdivisions}",
        f"DROP epsilon:            {meshing.drop_epsilon} mm",
        f"Default haunch fraction: {meshing.default_haunch_fraction}",
        f"Output formats:          {', '.join(output.formats)}",
        f"STL axes:                {'Y-up' if output.stl_y_up else 'Z-up'}",
    ]


def validate_settings_command(
    settings_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON settings file to validate"),
    ],
) -> None:
    """Validate a mesh settings file.

    Exits with 0 when the file can be used by ``generate`` and 1 otherwise.

    Example:
        membermesh validate-settings mesh-settings.json
    """
    typer.echo(f"Validating {settings_file}...\n")

    try:
        settings = load_settings(settings_file)
    except ConfigError as e:
        typer.echo("Errors:", err=True)
        for line in _error_lines(e):
            typer.echo(f"  {line}", err=True)
        typer.echo("\nValidation failed.", err=True)
        raise typer.Exit(code=1)

    for line in _settings_lines(settings):
        typer.echo(f"  {line}")
    if settings.schema_version not in SUPPORTED_VERSIONS:
        typer.echo(
            f"\nNote: schema version {settings.schema_version} is newer than "
            f"{max(SUPPORTED_VERSIONS)}; unknown fields are still rejected."
        )
    typer.echo("\nValidation passed. Settings are valid.")
