"""Typer CLI for structural member mesh generation."""

import logging
import math
from pathlib import Path
from typing import Annotated

import typer

from membermesh.application import (
    BatchOutput,
    ElementType,
    GenerateMemberCommand,
    MemberInput,
    MemberMeshOutput,
)
from membermesh.application.config import ConfigError, MeshSettings, load_settings
from membermesh.cli.commands import validate_settings_command
from membermesh.domain import (
    ContractViolation,
    NamedSection,
    PlacementMode,
    SectionPosition,
    Vector3,
)
from membermesh.domain.services import build_profile, section_height
from membermesh.domain.value_objects import SHAPE_KINDS, ProfileKind, shape_fields
from membermesh.infrastructure.exporters import ExporterRegistry, ExportManager

logger = logging.getLogger(__name__)


def _parse_point(value: str, option: str) -> Vector3:
    """Parse an ``x,y,z`` option value."""
    parts = [p.strip() for p in value.split(",")]
    try:
        x, y, z = (float(p) for p in parts)
    except ValueError:
        typer.echo(f"Error: {option} must be three comma-separated numbers (got {value!r})", err=True)
        raise typer.Exit(code=1)
    return Vector3(x, y, z)


def _build_shape(shape: str, dimensions: dict[str, float | int | None]) -> ProfileKind:
    """Build a shape dimension record from the dimension options that apply to it."""
    kind_class = SHAPE_KINDS[shape]
    kwargs = {
        name: dimensions[name]
        for name in shape_fields(kind_class)
        if dimensions.get(name) is not None
    }
    try:
        return kind_class(**kwargs)
    except TypeError:
        missing = [n for n in shape_fields(kind_class, required_only=True) if n not in kwargs]
        options = ", ".join(f"--{n.replace('_', '-')}" for n in missing)
        typer.echo(f"Error: shape '{shape}' requires {options}", err=True)
        raise typer.Exit(code=1)
    except ContractViolation as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    result: BatchOutput,
    settings: MeshSettings,
) -> None:
    """Handle export via the --output-formats option."""
    if output_formats_str.lower() == "all":
        formats = ExporterRegistry.available_formats()
    else:
        formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)

    manager = ExportManager(
        output_dir or Path("."),
        exporter_options={"stl": {"y_up": settings.output.stl_y_up}},
    )
    try:
        files = manager.export_all(formats, result, project_name)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")


def _print_summary(member: MemberMeshOutput) -> None:
    mesh = member.mesh
    placement = member.placement
    center = placement.center
    typer.echo(f"Member: {member.member_id}")
    typer.echo(f"  Length:      {placement.length:.3f} mm")
    typer.echo(f"  Center:      ({center.x:.3f}, {center.y:.3f}, {center.z:.3f})")
    typer.echo(f"  Boundaries:  {len(member.boundaries)}")
    typer.echo(f"  Vertices:    {mesh.vertex_count}")
    typer.echo(f"  Triangles:   {mesh.triangle_count}")
    typer.echo(f"  Watertight:  {'yes' if mesh.is_watertight() else 'no'}")
    typer.echo(f"  Volume:      {mesh.volume():.1f} mm^3")


app = typer.Typer(
    name="membermesh",
    help="Generate solid meshes for tapered and haunched structural members.",
)

app.command(name="validate-settings")(validate_settings_command)


@app.command()
def generate(
    shape: Annotated[
        str,
        typer.Option("--shape", "-s", help=f"Section shape: {', '.join(SHAPE_KINDS)}"),
    ] = "rectangle",
    depth: Annotated[float | None, typer.Option("--depth", help="Section depth (mm)")] = None,
    width: Annotated[float | None, typer.Option("--width", help="Section width (mm)")] = None,
    height: Annotated[float | None, typer.Option("--height", help="Section height (mm)")] = None,
    diameter: Annotated[float | None, typer.Option("--diameter", help="Outer diameter (mm)")] = None,
    web_thickness: Annotated[
        float | None, typer.Option("--web-thickness", help="Web thickness (mm)")
    ] = None,
    flange_thickness: Annotated[
        float | None, typer.Option("--flange-thickness", help="Flange thickness (mm)")
    ] = None,
    flange_width: Annotated[
        float | None, typer.Option("--flange-width", help="Flange width (mm)")
    ] = None,
    wall_thickness: Annotated[
        float | None, typer.Option("--wall-thickness", help="Box/pipe wall thickness (mm)")
    ] = None,
    thickness: Annotated[
        float | None, typer.Option("--thickness", help="Angle, cross or flat bar thickness (mm)")
    ] = None,
    gap: Annotated[
        float | None, typer.Option("--gap", help="Gap between a 2L or 2C pair (mm)")
    ] = None,
    segments: Annotated[
        int | None, typer.Option("--segments", help="Edges used for circles and pipes")
    ] = None,
    end_depth: Annotated[
        float | None, typer.Option("--end-depth", help="Depth at the END section (taper)")
    ] = None,
    end_width: Annotated[
        float | None, typer.Option("--end-width", help="Width at the END section (taper)")
    ] = None,
    end_height: Annotated[
        float | None, typer.Option("--end-height", help="Height at the END section (taper)")
    ] = None,
    end_diameter: Annotated[
        float | None, typer.Option("--end-diameter", help="Diameter at the END section (taper)")
    ] = None,
    length: Annotated[
        float | None, typer.Option("--length", "-l", help="Member length (mm)")
    ] = None,
    start: Annotated[
        str | None, typer.Option("--start", help="Start point as x,y,z (mm)")
    ] = None,
    end: Annotated[str | None, typer.Option("--end", help="End point as x,y,z (mm)")] = None,
    element_type: Annotated[
        ElementType, typer.Option("--element-type", "-e", help="Member kind")
    ] = ElementType.BEAM,
    placement_mode: Annotated[
        PlacementMode, typer.Option("--placement-mode", help="Reference point datum")
    ] = PlacementMode.CENTER,
    roll: Annotated[
        float, typer.Option("--roll", help="Roll about the member axis (degrees)")
    ] = 0.0,
    settings_file: Annotated[
        Path | None, typer.Option("--settings", help="Path to JSON settings file")
    ] = None,
    subdivisions: Annotated[
        int | None, typer.Option("--subdivisions", help="Override taper subdivisions")
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats, or 'all' (e.g. stl,json)",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None, typer.Option("--output-dir", help="Directory for exported files")
    ] = None,
    project_name: Annotated[
        str, typer.Option("--project-name", help="Base name for exported files")
    ] = "member",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Generate the mesh of a single member.

    The member runs from --start to --end, or along the default axis for
    --length mm (global X for beams, global Z otherwise). Giving any --end-*
    dimension tapers linearly from the START section to an END section.

    Example:
        membermesh generate --shape h --depth 400 --width 200 \\
            --web-thickness 9 --flange-thickness 14 --length 6000 \\
            --end-depth 600 --output-formats stl,json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    shape = shape.lower()
    if shape not in SHAPE_KINDS:
        typer.echo(f"Error: unknown shape '{shape}'. Available: {', '.join(SHAPE_KINDS)}", err=True)
        raise typer.Exit(code=1)

    settings = MeshSettings()
    if settings_file is not None:
        try:
            settings = load_settings(settings_file)
        except ConfigError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)
    meshing = settings.meshing
    if subdivisions is not None:
        if subdivisions < 1:
            typer.echo("Error: --subdivisions must be at least 1", err=True)
            raise typer.Exit(code=1)
        meshing = meshing.model_copy(update={"subdivisions": subdivisions})

    if start is not None or end is not None:
        if start is None or end is None:
            typer.echo("Error: --start and --end must be given together", err=True)
            raise typer.Exit(code=1)
        start_point = _parse_point(start, "--start")
        end_point = _parse_point(end, "--end")
    elif length is not None:
        start_point = Vector3.zero()
        if element_type == ElementType.BEAM:
            end_point = Vector3(length, 0.0, 0.0)
        else:
            end_point = Vector3(0.0, 0.0, length)
    else:
        typer.echo("Error: give --length or both --start and --end", err=True)
        raise typer.Exit(code=1)

    dimensions: dict[str, float | int | None] = {
        "depth": depth,
        "width": width,
        "height": height,
        "diameter": diameter,
        "web_thickness": web_thickness,
        "flange_thickness": flange_thickness,
        "flange_width": flange_width,
        "wall_thickness": wall_thickness,
        "thickness": thickness,
        "gap": gap,
        "segments": segments,
    }
    start_kind = _build_shape(shape, dimensions)
    sections = [NamedSection(SectionPosition.START, build_profile(start_kind))]
    heights = [section_height(start_kind)]

    end_overrides = {
        "depth": end_depth,
        "width": end_width,
        "height": end_height,
        "diameter": end_diameter,
    }
    if any(v is not None for v in end_overrides.values()):
        end_dimensions = dict(dimensions)
        end_dimensions.update({k: v for k, v in end_overrides.items() if v is not None})
        end_kind = _build_shape(shape, end_dimensions)
        sections.append(NamedSection(SectionPosition.END, build_profile(end_kind)))
        heights.append(section_height(end_kind))

    member = MemberInput(
        member_id=project_name,
        element_type=element_type,
        sections=sections,
        start=start_point,
        end=end_point,
        roll_angle=math.radians(roll),
        placement_mode=placement_mode,
        section_height=max(heights),
    )

    command = GenerateMemberCommand(meshing)
    result = command.execute_batch([member])
    if not result.is_complete:
        for skipped in result.skipped:
            typer.echo(f"Error: {skipped.reason}", err=True)
        raise typer.Exit(code=1)

    _print_summary(result.members[0])

    formats = output_formats
    if formats is None and output_dir is not None:
        formats = ",".join(settings.output.formats)
    if formats is not None:
        _handle_multi_format_export(formats, output_dir, project_name, result, settings)


@app.command()
def shapes() -> None:
    """List supported section shapes and their dimension options."""
    typer.echo("Supported shapes:")
    for name, kind_class in SHAPE_KINDS.items():
        options = ", ".join(f"--{f.replace('_', '-')}" for f in shape_fields(kind_class))
        typer.echo(f"  {name:<10} {options}")


if __name__ == "__main__":
    app()
